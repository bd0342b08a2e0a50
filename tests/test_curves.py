import pytest

from stagehand.curves import (
    CURVES,
    Color,
    KeyframeCurve,
    evaluate,
    get_curve,
    interpolate,
    linear,
    match_transparent,
)
from stagehand.exceptions import ConfigurationError


@pytest.mark.parametrize("name", sorted(CURVES))
@pytest.mark.parametrize("duration", [0.016, 0.5, 3.0, 1000.0])
def test_evaluate_endpoints_are_exact(name, duration):
    curve = CURVES[name]
    assert evaluate(curve, 0.0, duration) == 0.0
    assert evaluate(curve, duration, duration) == 1.0


@pytest.mark.parametrize("name", sorted(CURVES))
def test_evaluate_stays_in_unit_interval(name):
    curve = CURVES[name]
    for i in range(1, 20):
        t = evaluate(curve, i * 0.05, 1.0)
        assert 0.0 <= t <= 1.0


def test_evaluate_past_duration_clamps_to_one():
    assert evaluate(linear, 5.0, 1.0) == 1.0
    assert evaluate(linear, -1.0, 1.0) == 0.0


def test_evaluate_non_positive_duration_is_finished():
    assert evaluate(linear, 0.0, 0.0) == 1.0
    assert evaluate(linear, 0.0, -2.0) == 1.0


def test_evaluate_clamps_overshooting_curve():
    def overshoot(t):
        return t * 1.5

    assert evaluate(overshoot, 0.9, 1.0) == 1.0


def test_linear_midpoint():
    assert evaluate(linear, 0.5, 2.0) == pytest.approx(0.25)


def test_interpolate_floats():
    assert interpolate(2.0, 4.0, 0.5) == pytest.approx(3.0)
    assert interpolate(2.0, 4.0, 1.0) == 4.0
    assert interpolate(2.0, 4.0, 3.0) == 4.0
    assert interpolate(2.0, 4.0, -1.0) == 2.0


def test_interpolate_end_value_is_exact_for_colors():
    start = Color(0.1, 0.2, 0.3, 0.0)
    end = Color(0.7, 0.3, 0.9, 1.0)
    assert interpolate(start, end, 1.0) == end
    assert interpolate(start, end, 0.0) == start


def test_interpolate_rejects_mixed_types():
    with pytest.raises(TypeError):
        interpolate(Color.WHITE, 1.0, 0.5)


def test_match_transparent_copies_rgb_into_clear_start():
    red = Color(0.85, 0.1, 0.1, 1.0)
    start, end = match_transparent(Color.CLEAR, red)
    assert start == Color(0.85, 0.1, 0.1, 0.0)
    assert end == red


def test_match_transparent_copies_rgb_into_clear_end():
    red = Color(0.85, 0.1, 0.1, 1.0)
    start, end = match_transparent(red, Color.CLEAR)
    assert end == Color(0.85, 0.1, 0.1, 0.0)


def test_alpha_only_fade_keeps_hue():
    red = Color(0.85, 0.1, 0.1, 1.0)
    start, end = match_transparent(Color.CLEAR, red)
    for i in range(11):
        c = interpolate(start, end, i / 10)
        assert (c.r, c.g, c.b) == (0.85, 0.1, 0.1)


def test_match_transparent_leaves_opaque_pairs_alone():
    a = Color(1.0, 0.0, 0.0, 1.0)
    b = Color(0.0, 0.0, 1.0, 0.5)
    assert match_transparent(a, b) == (a, b)


def test_color_from_rgba_defaults_alpha():
    assert Color.from_rgba([0.5, 0.5, 0.5]) == Color(0.5, 0.5, 0.5, 1.0)
    with pytest.raises(ValueError):
        Color.from_rgba([1.0])


def test_keyframe_curve_ease_in_out_shape():
    curve = KeyframeCurve.ease_in_out()
    assert curve(0.0) == 0.0
    assert curve(1.0) == 1.0
    assert curve(0.5) == pytest.approx(0.5)
    # flat tangents: slow start, slow end
    assert curve(0.1) < 0.1
    assert curve(0.9) > 0.9


def test_keyframe_curve_holds_outside_range_and_hits_interior_keys():
    curve = KeyframeCurve([(1.0, 0.0), (0.0, 0.0), (0.5, 1.0)])
    assert curve(-1.0) == 0.0
    assert curve(2.0) == 0.0
    assert curve(0.5) == pytest.approx(1.0)


def test_keyframe_curve_explicit_tangents():
    curve = KeyframeCurve([(0.0, 0.0, 1.0), (1.0, 1.0, 1.0)])
    # unit tangents on a unit segment reproduce a straight line
    assert curve(0.25) == pytest.approx(0.25)


def test_keyframe_curve_rejects_bad_keys():
    with pytest.raises(ConfigurationError):
        KeyframeCurve([])
    with pytest.raises(ConfigurationError):
        KeyframeCurve([(0.0, 0.0), (0.0, 1.0)])


def test_get_curve():
    assert get_curve("linear") is linear
    with pytest.raises(ConfigurationError):
        get_curve("wobble")


@pytest.mark.parametrize(
    "name, t, expected",
    [
        ("linear", 0.3, 0.3),
        ("ease_in_quad", 0.5, 0.25),
        ("ease_out_quad", 0.5, 0.75),
        ("ease_in_out_cubic", 0.25, 0.0625),
        ("ease_in_out_sine", 0.5, 0.5),
    ],
)
def test_named_curve_values(name, t, expected):
    assert get_curve(name)(t) == pytest.approx(expected)
