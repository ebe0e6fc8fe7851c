from vibeflow.css.model import AtRule, Declaration, GroupRule, Item, Rule, Stylesheet
from vibeflow.css.parser import parse_css, parse_declarations, serialize

__all__ = [
    "AtRule",
    "Declaration",
    "GroupRule",
    "Item",
    "Rule",
    "Stylesheet",
    "parse_css",
    "parse_declarations",
    "serialize",
]
