import pytest

from stagehand.config import PresentationSettings, load_presentation_settings
from stagehand.curves import Color, KeyframeCurve
from stagehand.exceptions import ConfigurationError


def test_embedded_defaults_load():
    settings = load_presentation_settings()
    assert settings.curve == "ease_in_out"
    assert settings.opening.fade_time == 0.5
    assert settings.opening.wait_time == 2.5
    assert settings.opening.padding == 0.5
    assert settings.title.fade_in_time == 3.0
    assert settings.title.wait_time == 1.5
    assert settings.title.fade_out_time == 1.5
    assert isinstance(settings.fade_curve(), KeyframeCurve)


def test_load_from_path(tmp_path):
    path = tmp_path / "presentation.yaml"
    path.write_text(
        "curve: linear\n"
        "opening:\n"
        "  fade_time: 1.0\n"
        "  wait_time: 2.0\n"
        "title:\n"
        "  color: [0.2, 0.4, 0.6]\n",
        encoding="utf-8",
    )
    settings = load_presentation_settings(str(path))

    assert settings.curve == "linear"
    # omitted edge padding falls back to the fade time
    assert settings.opening.padding == 1.0
    assert settings.opening.total_time == pytest.approx(6.0)
    assert settings.title.as_color() == Color(0.2, 0.4, 0.6, 1.0)


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    settings = load_presentation_settings(str(path))
    assert settings == PresentationSettings()


@pytest.mark.parametrize(
    "text",
    [
        "curve: wobble\n",
        "opening:\n  fade_time: -1\n",
        "title:\n  color: [2.0, 0.0, 0.0]\n",
        "title:\n  color: [1.0]\n",
        "glitch:\n  generator_radius: 0\n",
        "- just\n- a list\n",
        "opening: [unclosed\n",
    ],
)
def test_invalid_settings_raise_configuration_error(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_presentation_settings(str(path))


def test_missing_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        load_presentation_settings(str(tmp_path / "nope.yaml"))
