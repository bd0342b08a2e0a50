def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp a value between min_value and max_value inclusive."""
    return max(min_value, min(value, max_value))


def clamp01(value: float) -> float:
    """Clamp a value into the unit interval."""
    return clamp(float(value), 0.0, 1.0)
