"""Tests for the vibeflow CLI commands."""

from __future__ import annotations

import json

from tests.test_extractor.conftest import LIST_SOURCE
from vibeflow import __version__
from vibeflow.cli.main import cli


def write(tmp_path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("resolve", "extract", "optimize", "serve"):
            assert name in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert result.output.strip() == f"vibeflow, version {__version__}"

    def test_serve_help(self, runner):
        result = runner.invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--port" in result.output
        assert "--debug" in result.output


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


class TestResolveCommand:
    def test_text_output(self, runner, tmp_path):
        css = write(tmp_path, "a.css", ".a { padding: 16px; }\n.b { transition: all 1s; }\n")
        result = runner.invoke(cli, ["resolve", css])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[:3] == [".a: p-4", ".b: (none)", ""]
        assert "transition: all 1s;" in result.output

    def test_json_output(self, runner, tmp_path):
        css = write(tmp_path, "a.css", ".a { margin: 4px; }")
        result = runner.invoke(cli, ["resolve", "--json", css])
        assert json.loads(result.output) == {"perSelectorClasses": {".a": ["m-1"]}, "fallbackCss": ""}

    def test_no_arbitrary(self, runner, tmp_path):
        css = write(tmp_path, "a.css", ".a { padding: 13px; }")
        assert runner.invoke(cli, ["resolve", css]).output.startswith(".a: p-[13px]")
        assert runner.invoke(cli, ["resolve", "--no-arbitrary", css]).output.startswith(".a: (none)")

    def test_theme_file(self, runner, tmp_path):
        theme = write(tmp_path, "theme.json", json.dumps({"spacingScale": {"gutter": "13px"}}))
        css = write(tmp_path, "a.css", ".a { padding: 13px; }")
        result = runner.invoke(cli, ["resolve", "--theme", theme, css])
        assert result.output.startswith(".a: p-gutter")

    def test_bad_theme_file(self, runner, tmp_path):
        theme = write(tmp_path, "theme.json", "{not json")
        css = write(tmp_path, "a.css", ".a { padding: 13px; }")
        result = runner.invoke(cli, ["resolve", "--theme", theme, css])
        assert result.exit_code == 1
        assert "Config error:" in result.output

    def test_parse_error(self, runner, tmp_path):
        result = runner.invoke(cli, ["resolve", write(tmp_path, "bad.css", ".a {")])
        assert result.exit_code == 1
        assert "Parse error:" in result.output


# ---------------------------------------------------------------------------
# extract command
# ---------------------------------------------------------------------------


class TestExtractCommand:
    def test_stdout(self, runner, tmp_path):
        result = runner.invoke(cli, ["extract", write(tmp_path, "List.tsx", LIST_SOURCE)])
        assert result.exit_code == 0
        assert result.output.startswith("function ExtractedItem({ text00 }: any) {")
        assert '<ExtractedItem text00="B" />' in result.output

    def test_options(self, runner, tmp_path):
        src = write(tmp_path, "List.tsx", LIST_SOURCE)
        result = runner.invoke(cli, ["extract", "--prefix", "Row", "--collapse", "--untyped", src])
        assert "function Row({ text00 }) {" in result.output
        assert "const rowData = [" in result.output

    def test_output_file(self, runner, tmp_path):
        src = write(tmp_path, "List.tsx", LIST_SOURCE)
        out = tmp_path / "out.tsx"
        result = runner.invoke(cli, ["extract", src, "-o", str(out)])
        assert result.exit_code == 0
        assert result.output.strip() == f"Wrote {out} (ExtractedItem)"
        assert out.read_text().startswith("function ExtractedItem(")

    def test_nothing_extracted(self, runner, tmp_path):
        src = write(tmp_path, "a.tsx", "export const a = 1;\n")
        out = tmp_path / "out.tsx"
        result = runner.invoke(cli, ["extract", src, "-o", str(out)])
        assert result.output.strip().endswith("(nothing extracted)")
        assert out.read_text() == "export const a = 1;\n"

    def test_min_repeats(self, runner, tmp_path):
        src = write(tmp_path, "List.tsx", LIST_SOURCE)
        result = runner.invoke(cli, ["extract", "--min-repeats", "4", src])
        assert result.output == LIST_SOURCE

    def test_bad_prefix(self, runner, tmp_path):
        result = runner.invoke(cli, ["extract", "--prefix", "row", write(tmp_path, "List.tsx", LIST_SOURCE)])
        assert result.exit_code == 1
        assert "Config error:" in result.output

    def test_parse_error(self, runner, tmp_path):
        result = runner.invoke(cli, ["extract", write(tmp_path, "bad.tsx", "const v = <div>;")])
        assert result.exit_code == 1
        assert "Parse error:" in result.output


# ---------------------------------------------------------------------------
# optimize command
# ---------------------------------------------------------------------------


class TestOptimizeCommand:
    def test_json(self, runner, tmp_path):
        markup = write(tmp_path, "List.tsx", LIST_SOURCE)
        css = write(tmp_path, "list.css", ".x { margin: 4px; }")
        result = runner.invoke(cli, ["optimize", markup, css])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["classes"] == {"x": ["m-1"]}
        assert data["changed"] is True
        assert '<div className="m-1"><span>{text00}</span></div>' in data["markup"]

    def test_no_extract(self, runner, tmp_path):
        markup = write(tmp_path, "List.tsx", LIST_SOURCE)
        css = write(tmp_path, "list.css", ".x { margin: 4px; }")
        data = json.loads(runner.invoke(cli, ["optimize", "--no-extract", markup, css]).output)
        assert "ExtractedItem" not in data["markup"]

    def test_out_dir(self, runner, tmp_path):
        markup = write(tmp_path, "List.tsx", LIST_SOURCE)
        css = write(tmp_path, "list.css", ".x { margin: 4px; transition: all 1s; }")
        out = tmp_path / "build"
        result = runner.invoke(cli, ["optimize", "--out-dir", str(out), markup, css])
        assert result.exit_code == 0
        assert result.output.startswith("Wrote ")
        assert "ExtractedItem" in (out / "List.tsx").read_text()
        assert "transition: all 1s;" in (out / "list.css").read_text()

    def test_warning_reported(self, runner, tmp_path):
        markup = write(tmp_path, "List.tsx", LIST_SOURCE)
        css = write(tmp_path, "list.css", ".x {")
        result = runner.invoke(cli, ["optimize", "--out-dir", str(tmp_path / "o"), markup, css])
        assert result.exit_code == 0
        assert "Warning: CSS conversion failed:" in result.output
