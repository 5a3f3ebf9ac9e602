import pytest

from validators import TextValidator


@pytest.mark.parametrize("value", [None, False, 0, 0.0, float("nan"), ""])
def test_missing_values_are_not_present(value):
    assert TextValidator.is_present(value) is False


@pytest.mark.parametrize("value", ["x", "   ", 1, -2.5, True, [], {}, [0]])
def test_other_values_are_present(value):
    assert TextValidator.is_present(value) is True


@pytest.mark.parametrize("value, expected", [
    ("Dune", "Dune"),
    (42, "42"),
    (3.0, "3"),
    (2.5, "2.5"),
    (True, "true"),
    (False, "false"),
    ([1, "a", None], "1,a,"),
    ({"a": 1}, "[object Object]"),
])
def test_to_text(value, expected):
    assert TextValidator.to_text(value) == expected


def test_clean_trims():
    assert TextValidator.clean("  Dune  ") == "Dune"
    assert TextValidator.clean("   ") == ""


@pytest.mark.parametrize("value, expected", [
    (1e21, "1e+21"),
    (10 ** 21, "1e+21"),
    (123456789012345680000.0, "123456789012345680000"),
    (1e-7, "1e-7"),
    (1.5e-7, "1.5e-7"),
    (0.000001, "0.000001"),
    (2.5e25, "2.5e+25"),
    (-0.5, "-0.5"),
    (100.0, "100"),
    (-0.0, "0"),
    (float("inf"), "Infinity"),
    (float("-inf"), "-Infinity"),
    (float("nan"), "NaN"),
])
def test_numbers_render_like_javascript(value, expected):
    assert TextValidator.to_text(value) == expected
