from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from vibeflow.errors import ConfigError, ParseError
from vibeflow.extractor import ExtractorOptions, extract_repetitions
from vibeflow.pipeline import OptimizeOptions, optimize
from vibeflow.resolver import UtilityResolver
from vibeflow.theme import ThemeConfig

api_bp = Blueprint("api", __name__)


class RequestInvalid(Exception):
    def __init__(self, issues: list[dict[str, str]]):
        self.issues = issues
        super().__init__("; ".join(f"{i['path']}: {i['message']}" for i in issues))


@api_bp.errorhandler(RequestInvalid)
def request_invalid(exc: RequestInvalid):
    return jsonify({"error": "Validation failed", "issues": exc.issues}), 400


@api_bp.errorhandler(ParseError)
def parse_failed(exc: ParseError):
    return jsonify({
        "error": "Parse error",
        "message": str(exc),
        "line": exc.line,
        "column": exc.column,
    }), 422


def _json_body(fields: dict[str, tuple[type, bool]]) -> dict[str, Any]:
    """The request's JSON object, checked against ``{name: (type, required)}``."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestInvalid([{"path": "", "message": "Request body must be a JSON object"}])
    issues = []
    for name, (kind, required) in fields.items():
        if name not in data:
            if required:
                issues.append({"path": name, "message": "Required"})
            continue
        value = data[name]
        if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
            issues.append({"path": name, "message": f"Expected {kind.__name__}"})
    if issues:
        raise RequestInvalid(issues)
    return data


def _theme(data: dict[str, Any]) -> ThemeConfig:
    if "theme" not in data:
        return current_app.extensions["vibeflow_theme"]
    try:
        return ThemeConfig.from_dict(data["theme"])
    except ConfigError as exc:
        raise RequestInvalid([{"path": "theme", "message": str(exc)}]) from None


def _extractor_options(data: dict[str, Any]) -> ExtractorOptions:
    config = current_app.extensions["vibeflow_config"]
    defaults = {
        "generatedNamePrefix": config.generated_name_prefix,
        "preferCollapsedIteration": config.prefer_collapsed_iteration,
        "minimumRepeatCount": config.minimum_repeat_count,
    }
    try:
        return ExtractorOptions.from_dict({**defaults, **data.get("options", {})})
    except (ConfigError, TypeError) as exc:
        raise RequestInvalid([{"path": "options", "message": str(exc)}]) from None


@api_bp.route("/resolve", methods=["POST"])
def resolve():
    """Resolve CSS rules to utility classes."""
    data = _json_body({"css": (str, True), "theme": (dict, False)})
    result = UtilityResolver(_theme(data)).resolve(data["css"])
    return jsonify(result.to_dict())


@api_bp.route("/extract", methods=["POST"])
def extract():
    """Fold repeated sibling JSX into generated components."""
    data = _json_body({"source": (str, True), "options": (dict, False)})
    result = extract_repetitions(data["source"], _extractor_options(data))
    return jsonify(result.to_dict())


@api_bp.route("/optimize", methods=["POST"])
def optimize_markup():
    """Resolve, rewrite classes and extract; engine failures become warnings."""
    data = _json_body({
        "markup": (str, True),
        "css": (str, True),
        "theme": (dict, False),
        "options": (dict, False),
        "extract": (bool, False),
    })
    options = OptimizeOptions(
        theme=_theme(data),
        extractor=_extractor_options(data),
        extract=data.get("extract", True),
    )
    result = optimize(data["markup"], data["css"], options)
    return jsonify(result.to_dict())
