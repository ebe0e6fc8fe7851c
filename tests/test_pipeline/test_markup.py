"""Tests for markup helpers."""

from vibeflow.markup import (
    apply_class_mapping,
    class_name_from_selector,
    generate_component_name,
    merge_classes,
    replace_data_urls_with_prefix,
)


class TestClassNameFromSelector:
    def test_simple(self):
        assert class_name_from_selector(".card") == "card"

    def test_descendant_uses_last_class(self):
        assert class_name_from_selector(".list .item") == "item"

    def test_non_class_selector_unchanged(self):
        assert class_name_from_selector("body") == "body"


class TestMergeClasses:
    def test_dedupes_in_order(self):
        assert merge_classes("a b", ["b", "c"], None, "") == "a b c"


class TestApplyClassMapping:
    def test_class_name_attribute(self):
        markup = '<div className="card title">x</div>'
        out = apply_class_mapping(markup, {"card": ["p-4", "m-2"]})
        assert out == '<div className="p-4 m-2 title">x</div>'

    def test_html_class_attribute(self):
        out = apply_class_mapping("<p class='lead'>x</p>", {"lead": ["text-lg"]})
        assert out == "<p class='text-lg'>x</p>"

    def test_kept_class_stays_beside_utilities(self):
        out = apply_class_mapping('<i className="icon">x</i>', {"icon": ["w-4"]}, keep={"icon"})
        assert out == '<i className="icon w-4">x</i>'

    def test_unmapped_and_empty(self):
        markup = '<div className="other">x</div>'
        assert apply_class_mapping(markup, {}) == markup
        assert apply_class_mapping(markup, {"card": ["p-4"]}) == markup

    def test_duplicate_utilities_merged(self):
        out = apply_class_mapping('<a className="a b">x</a>', {"a": ["p-4"], "b": ["p-4", "m-1"]})
        assert out == '<a className="p-4 m-1">x</a>'


class TestNames:
    def test_generate_component_name(self):
        assert generate_component_name("hero banner") == "HerobannerComponent"
        assert generate_component_name("12-card!") == "CardComponent"
        assert generate_component_name("HeroComponent") == "HeroComponent"
        assert generate_component_name("!!!") == "DefaultComponent"

    def test_replace_data_urls(self):
        assets = {"logo": "data:image/png;base64,AAAA", "photo": "https://example.com/a.png"}
        assert replace_data_urls_with_prefix(assets) == {
            "logo": "base64:AAAA",
            "photo": "https://example.com/a.png",
        }
