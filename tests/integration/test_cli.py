"""
Integration tests for CLI.
"""

import io
import json
import logging

import pytest

from unravel.cli import main, parse_args, read_input, rewrite, setup_logging


PAGE = {
    "type": "root",
    "children": [
        {"type": "paragraph", "children": [
            {"type": "mdxJsxTextElement", "name": "Hero", "attributes": [], "children": []},
        ]},
        {"type": "mdxJsxFlowElement", "name": "Card", "attributes": [], "children": [
            {"type": "paragraph", "children": [{"type": "text", "value": "hi"}]},
        ]},
    ],
}


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.json"
    path.write_text(json.dumps(PAGE))
    return path


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.file is None
        assert args.mode is None
        assert args.input_format is None
        assert args.output_format is None
        assert args.indent is None
        assert args.output is None
        assert args.verbose is False

    def test_all_flags(self):
        args = parse_args([
            "page.json",
            "--mode", "component-only",
            "--from", "json",
            "--to", "outline",
            "--indent", "0",
            "--output", "out.txt",
            "-v",
        ])
        assert args.file == "page.json"
        assert args.mode == "component-only"
        assert args.input_format == "json"
        assert args.output_format == "outline"
        assert args.indent == 0
        assert args.output == "out.txt"
        assert args.verbose

    def test_bad_mode_rejected(self):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--mode", "some"])
        assert exc.value.code == 2

    def test_negative_indent_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--indent", "-2"])
        assert exc.value.code == 2
        assert "must be a whole number >= 0" in capsys.readouterr().err


class TestReadInput:
    def test_file(self, page_file):
        content, filename = read_input(str(page_file))
        assert json.loads(content) == PAGE
        assert filename == str(page_file)

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("{}"))
        assert read_input(None) == ("{}", None)


class TestRewrite:
    def test_full(self):
        out = rewrite(json.dumps(PAGE), mode="all", output_format="outline", indent=0)
        assert out == 'Root[C(Hero), B(Card)[T("hi")]]'

    def test_component_only(self):
        out = rewrite(json.dumps(PAGE), mode="component-only", output_format="outline", indent=0)
        assert out == 'Root[C(Hero), B(Card)[Paragraph[T("hi")]]]'

    def test_json_out(self):
        out = json.loads(rewrite(json.dumps(PAGE)))
        assert out["children"][0]["name"] == "Hero"
        assert out["children"][1]["children"] == [{"type": "text", "value": "hi"}]

    def test_negative_indent_renders_compact(self):
        assert "\n" not in rewrite(json.dumps(PAGE), indent=-3)


class TestMain:
    def test_file_to_stdout(self, page_file, capsys):
        assert main([str(page_file), "--to", "outline", "--indent", "0"]) == 0
        assert capsys.readouterr().out.strip() == 'Root[C(Hero), B(Card)[T("hi")]]'

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(PAGE)))
        assert main(["--mode", "component-only", "--indent", "0"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["children"][1]["children"][0]["type"] == "paragraph"

    def test_output_file(self, page_file, tmp_path):
        target = tmp_path / "out.json"
        assert main([str(page_file), "-o", str(target)]) == 0
        assert json.loads(target.read_text())["children"][0]["name"] == "Hero"

    def test_mode_from_config(self, page_file, monkeypatch, capsys):
        monkeypatch.setenv("UNRAVEL_MODE", "component-only")
        assert main([str(page_file), "--to", "outline", "--indent", "0"]) == 0
        assert "Paragraph[" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_malformed_tree(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text('{"children": []}')
        assert main([str(bad)]) == 1
        assert "node has no string 'type'" in capsys.readouterr().err

    def test_unknown_format(self, page_file, capsys):
        assert main([str(page_file), "--to", "yaml"]) == 1
        assert "Unknown format 'yaml'" in capsys.readouterr().err

    def test_unknown_mode_from_env(self, page_file, monkeypatch, capsys):
        monkeypatch.setenv("UNRAVEL_MODE", "everything")
        assert main([str(page_file)]) == 1
        assert "Unknown unwrap mode" in capsys.readouterr().err

    def test_outline_input_rejected(self, page_file, capsys):
        assert main([str(page_file), "--from", "outline"]) == 1
        assert "output-only" in capsys.readouterr().err


class TestSetupLogging:
    @pytest.mark.parametrize("level, expected", [
        ("DEBUG", logging.DEBUG),
        ("ERROR", logging.ERROR),
        ("ROOT", logging.WARNING),
        ("INFO_X", logging.WARNING),
    ])
    def test_level_names(self, monkeypatch, level, expected):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        setup_logging(level)
        assert calls[0]["level"] == expected

    def test_verbose_wins(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        setup_logging("ERROR", verbose=True)
        assert calls[0]["level"] == logging.DEBUG

    def test_unknown_level_from_env_still_runs(self, page_file, monkeypatch, capsys):
        monkeypatch.setenv("UNRAVEL_LOG_LEVEL", "root")
        assert main([str(page_file), "--to", "outline", "--indent", "0"]) == 0
        assert capsys.readouterr().out.strip() == 'Root[C(Hero), B(Card)[T("hi")]]'
