"""Tests for shorthand expansion."""

from vibeflow.css import Declaration
from vibeflow.resolver.shorthand import expand_shorthand, split_value


def expand(prop: str, value: str) -> list[tuple[str, str]]:
    return [(d.property, d.value) for d in expand_shorthand(Declaration(prop, value))]


class TestSplitValue:
    def test_whitespace(self):
        assert split_value(" 1px  2px ") == ["1px", "2px"]

    def test_functions_kept_whole(self):
        assert split_value("1px solid rgb(0, 0, 0)") == ["1px", "solid", "rgb(0, 0, 0)"]

    def test_quotes_kept_whole(self):
        assert split_value('"Open Sans" serif') == ['"Open Sans"', "serif"]


class TestFourWay:
    def test_one_value(self):
        assert expand("padding", "4px") == [
            ("padding-top", "4px"), ("padding-right", "4px"),
            ("padding-bottom", "4px"), ("padding-left", "4px"),
        ]

    def test_three_values(self):
        assert [v for _, v in expand("margin", "1px 2px 3px")] == ["1px", "2px", "3px", "2px"]

    def test_elliptical_radius_not_split(self):
        assert expand("border-radius", "10px / 20px") == [("border-radius", "10px / 20px")]

    def test_too_many_values(self):
        assert expand("margin", "1px 2px 3px 4px 5px") == [("margin", "1px 2px 3px 4px 5px")]


class TestBorder:
    def test_missing_parts_get_initial_values(self):
        longhands = dict(expand("border", "solid"))
        assert longhands["border-top-width"] == "medium"
        assert longhands["border-top-style"] == "solid"
        assert longhands["border-top-color"] == "currentcolor"

    def test_filled_in_values_marked_implied(self):
        longhands = expand_shorthand(Declaration("border-top", "none"))
        assert [(d.property, d.implied) for d in longhands] == [
            ("border-top-width", True),
            ("border-top-style", False),
            ("border-top-color", True),
        ]
        assert all(type(d.value) is str for d in longhands)

    def test_side(self):
        assert expand("border-left", "1px dashed red") == [
            ("border-left-width", "1px"),
            ("border-left-style", "dashed"),
            ("border-left-color", "red"),
        ]

    def test_unrecognised_token(self):
        assert expand("border", "1px solid url(x.png)") == [("border", "1px solid url(x.png)")]


class TestOther:
    def test_flex_numbers(self):
        assert expand("flex", "2 0 10px") == [("flex-grow", "2"), ("flex-shrink", "0"), ("flex-basis", "10px")]

    def test_flex_keyword(self):
        assert expand("flex", "auto") == [("flex-grow", "1"), ("flex-shrink", "1"), ("flex-basis", "auto")]

    def test_background_colour_only(self):
        assert expand("background", "#fff") == [("background-color", "#fff")]
        assert expand("background", "url(a.png) no-repeat") == [("background", "url(a.png) no-repeat")]

    def test_longhands_keep_origin_and_importance(self):
        decl = Declaration("gap", "4px", important=True)
        longhands = expand_shorthand(decl)
        assert all(lh.origin is decl and lh.important for lh in longhands)

    def test_var_never_expanded(self):
        assert expand("margin", "var(--m) 0") == [("margin", "var(--m) 0")]

    def test_not_a_shorthand(self):
        assert expand("color", "red") == [("color", "red")]
