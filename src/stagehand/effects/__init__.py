from .glitch import GlitchEffect, GlitchValueGenerator, IntensitySignal, scan_line_jitter

__all__ = [
    "GlitchEffect",
    "GlitchValueGenerator",
    "IntensitySignal",
    "scan_line_jitter",
]
