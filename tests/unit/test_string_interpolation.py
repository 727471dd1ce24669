import pytest

from dockremote.UTILS.string_interpolation import EnvironmentInterpolator


@pytest.mark.parametrize("template,context,expected", [
    ("${A}", {"A": "1"}, "1"),
    ("${A:-fallback}", {}, "fallback"),
    ("${A:-fallback}", {"A": ""}, "fallback"),
    ("${A:-fallback}", {"A": "set"}, "set"),
    ("${A:+alt}", {"A": "set"}, "alt"),
    ("${A:+alt}", {}, ""),
    ("cost: $$5", {}, "cost: $5"),
    ("$$${A}", {"A": "x"}, "$x"),
    ("no placeholders", {}, "no placeholders"),
])
def test_interpolate(template, context, expected):
    assert EnvironmentInterpolator.interpolate(template, context) == expected


def test_missing_variable_raises():
    with pytest.raises(KeyError):
        EnvironmentInterpolator.interpolate("${MISSING}", {})
