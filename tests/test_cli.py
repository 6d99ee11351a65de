"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
import yaml

from map_mcp_tools.cli import build_parser, load_tool_calls, main


class TestLoadToolCalls:
    def test_json_list(self):
        calls = load_tool_calls('[{"name": "clear_map_layers", "input": {}}]')
        assert calls == [{"name": "clear_map_layers", "input": {}}]

    def test_json_lines(self):
        text = '{"id": "a", "name": "clear_map_layers"}\n\n{"id": "b", "name": "clear_map_layers"}\n'
        assert [c["id"] for c in load_tool_calls(text)] == ["a", "b"]

    def test_response_content(self):
        text = json.dumps({"content": [{"type": "text", "text": "hi"}]})
        assert load_tool_calls(text) == [{"type": "text", "text": "hi"}]

    def test_openai_message(self):
        text = json.dumps({"role": "assistant", "tool_calls": [{"id": "c"}]})
        assert load_tool_calls(text) == [{"id": "c"}]

    def test_empty(self):
        assert load_tool_calls("  ") == []

    def test_json_lines_error_names_line(self):
        text = '\n{"id": "a"}\n{broken\n'
        with pytest.raises(ValueError, match="line 3"):
            load_tool_calls(text)


class TestCli:
    def test_parser_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_catalog(self, capsys):
        assert main(["catalog"]) == 0
        tools = json.loads(capsys.readouterr().out)
        assert [t["name"] for t in tools][0] == "add_points_to_map"
        assert "input_schema" in tools[0]

    def test_catalog_openai(self, capsys):
        assert main(["catalog", "--format", "openai"]) == 0
        tools = json.loads(capsys.readouterr().out)
        assert tools[0]["type"] == "function"

    def test_run_and_export(self, tmp_path: Path, capsys):
        calls = tmp_path / "calls.json"
        calls.write_text(json.dumps([
            {"type": "tool_use", "id": "a", "name": "add_points_to_map",
             "input": {"points": [{"lat": 40.7128, "lng": -74.0060}]}},
            {"type": "tool_use", "id": "b", "name": "fit_map_to_bounds",
             "input": {"coordinates": [[-74.0060, 40.7128], [-73.9, 40.8]]}},
        ]), encoding="utf-8")
        export = tmp_path / "map.yaml"

        assert main(["run", str(calls), "--export", str(export)]) == 0

        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert [line["id"] for line in lines] == ["a", "b"]
        assert all(line["status"] == "success" for line in lines)
        assert yaml.safe_load(export.read_text(encoding="utf-8"))["count"] == 1

    def test_run_reports_failures(self, tmp_path: Path, capsys):
        calls = tmp_path / "calls.jsonl"
        calls.write_text('{"id": "x", "name": "bogus", "input": {}}\n', encoding="utf-8")
        assert main(["run", str(calls)]) == 1
        line = json.loads(capsys.readouterr().out)
        assert line["code"] == "UNKNOWN_TOOL"

    def test_run_with_config(self, tmp_path: Path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("reset_layers_on_style_change: false\n", encoding="utf-8")
        calls = tmp_path / "calls.json"
        calls.write_text(
            json.dumps([{"id": "s", "name": "set_map_style", "input": {"styleUrl": "mapbox://styles/a"}}]),
            encoding="utf-8",
        )
        assert main(["run", str(calls), "--config", str(config)]) == 0
        assert json.loads(capsys.readouterr().out)["data"] == "Set map style to: mapbox://styles/a"

    def test_run_rejects_malformed_json_lines(self, tmp_path: Path, capsys, caplog):
        calls = tmp_path / "calls.jsonl"
        calls.write_text(
            '{"id": "a", "name": "clear_map_layers"}\n{"id": "b", "name":\n',
            encoding="utf-8",
        )
        assert main(["run", str(calls)]) == 2
        assert "line 2" in caplog.text
        assert capsys.readouterr().out == ""
