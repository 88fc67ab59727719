"""Tests for the line-oriented command-line interface.

WHY: The CLI is how vocabulary files get converted in batch. One output
line per input line, in order, is what downstream tools rely on.

HOW: stdin is replaced with io.StringIO via monkeypatch, output is read
with capsys. --remote is tested with a fake client class patched into
the cli module.

RULES:
- main() is called with an explicit argv list
- Error paths are checked through SystemExit codes
"""

from __future__ import annotations

import io

import httpx
import pytest

from conftest import SEP, TRAIL
from term2regex import cli
from term2regex.api.client import ConverterClient
from term2regex.cli import build_parser, main, printable


def _run(monkeypatch, capsys, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    main(argv)
    return capsys.readouterr()


class TestPrintable:
    """Non-printable characters are shown as escapes."""

    def test_plain_text_unchanged(self):
        assert printable("[Aa]nemias?[^A-Za-z0-9]") == "[Aa]nemias?[^A-Za-z0-9]"

    def test_tab(self):
        assert printable("a\tb") == "a\\x09b"

    def test_bmp_control(self):
        assert printable("a\u2028b") == "a\\u2028b"

    def test_non_ascii_printable_kept(self):
        assert printable("naïve") == "naïve"


class TestLineConversion:
    """Each input line becomes one output line."""

    def test_default_settings(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, [], "anaemia\nof the anemia\n").out
        assert out.splitlines() == [
            "[Aa]na?emias?" + TRAIL,
            "of" + SEP + "the" + SEP + "[Aa]nemias?" + TRAIL,
        ]

    def test_no_trail(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail"], "anaemia\n").out
        assert out == "[Aa]na?emias?\n"

    def test_empty_line(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, [], "\n").out
        assert out == TRAIL + "\n"

    def test_last_line_without_newline(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail"], "artery").out
        assert out == "[Aa]rter(y|ies)\n"

    def test_windows_line_endings(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail"], "artery\r\n").out
        assert out == "[Aa]rter(y|ies)\n"

    def test_tab_in_sep_pattern_is_printable(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail", "--sep", "\t"], "a b\n").out
        assert out == "[Aa]\\x09[Bb]\n"

    def test_reads_files(self, monkeypatch, capsys, tmp_path):
        f = tmp_path / "terms.txt"
        f.write_text("artery\nof\n", encoding="utf-8")
        out = _run(monkeypatch, capsys, ["--no-trail", str(f)]).out
        assert out.splitlines() == ["[Aa]rter(y|ies)", "of"]


class TestConfigurationFlags:
    """Flags override the default configuration."""

    def test_stop_words(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail", "--stop-words", "und"], "und of\n").out
        assert out == "und" + SEP + "[Oo]fs?\n"

    def test_trail(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--trail", "\\b"], "of\n").out
        assert out == "of\\b\n"

    def test_split(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail", "--split", "/+"], "of/the\n").out
        assert out == "of" + SEP + "the\n"

    def test_dialect(self, monkeypatch, capsys):
        out = _run(monkeypatch, capsys, ["--no-trail", "--dialect", "monq"], "a!b\n").out
        assert out == "[Aa]\\!bs?\n"

    def test_config_file(self, monkeypatch, capsys, tmp_path):
        cfg = tmp_path / "cfg.json"
        cfg.write_text('{"trailing_context_pattern": "", "stop_words": ["de"]}', encoding="utf-8")
        out = _run(monkeypatch, capsys, ["--config", str(cfg)], "de\n").out
        assert out == "de\n"

    def test_flag_overrides_config_file(self, monkeypatch, capsys, tmp_path):
        cfg = tmp_path / "cfg.json"
        cfg.write_text('{"trailing_context_pattern": "$"}', encoding="utf-8")
        out = _run(monkeypatch, capsys, ["--config", str(cfg), "--no-trail"], "of\n").out
        assert out == "of\n"


class TestExplain:
    """--explain reports spans on stderr without touching stdout."""

    def test_explain(self, monkeypatch, capsys):
        captured = _run(monkeypatch, capsys, ["--explain", "--no-trail"], "of 5HT\n")
        assert captured.out == "of" + SEP + "5HT\n"
        assert "stopword" in captured.err
        assert "separator" in captured.err
        assert "funny" in captured.err


class TestErrors:
    """Configuration and I/O problems exit with status 1."""

    def test_invalid_split_pattern(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, capsys, ["--split", "["], "a\n")
        assert exc_info.value.code == 1
        assert "word_split_pattern" in capsys.readouterr().err

    def test_missing_input_file(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, capsys, [str(tmp_path / "missing.txt")])
        assert exc_info.value.code == 1

    def test_input_file_not_utf8(self, monkeypatch, capsys, tmp_path):
        f = tmp_path / "terms.txt"
        f.write_bytes(b"an\xffemia\n")
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, capsys, [str(f)])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_dialect_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--dialect", "perl"])


class _FakeClient:
    """Stands in for ConverterClient in --remote tests."""

    calls: list = []

    def __init__(self, base_url=None, **kwargs):
        self.base_url = base_url

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def convert(self, terms, config=None):
        _FakeClient.calls.append((self.base_url, list(terms), config))
        return ["<{}>".format(t) for t in terms]


class TestRemote:
    """--remote converts through the HTTP client."""

    def test_remote_conversion(self, monkeypatch, capsys):
        _FakeClient.calls = []
        monkeypatch.setattr(cli, "ConverterClient", _FakeClient)
        out = _run(monkeypatch, capsys, ["--remote", "http://svc", "--no-trail"], "a\nb\n").out
        assert out.splitlines() == ["<a>", "<b>"]
        base_url, terms, config = _FakeClient.calls[0]
        assert base_url == "http://svc"
        assert terms == ["a", "b"]
        assert config["trailing_context_pattern"] == ""

    def test_unreachable_service(self, monkeypatch, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("All connection attempts failed", request=request)

        def unreachable_client(base_url=None, **kwargs):
            return ConverterClient(base_url, transport=httpx.MockTransport(handler))

        monkeypatch.setattr(cli, "ConverterClient", unreachable_client)
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, capsys, ["--remote", "http://svc"], "a\n")
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "http://svc" in err

    def test_explain_rejected_with_remote(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, capsys, ["--remote", "http://svc", "--explain"], "a\n")
        assert exc_info.value.code == 2
        assert "--explain" in capsys.readouterr().err
