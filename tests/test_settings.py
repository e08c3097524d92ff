"""Tests for EnvSettings and the CLI entry point."""
import json

import pytest

import main
from event_ocr.lib.settings import EnvSettings


class TestEnvSettings:
    def test_get_int_default(self, monkeypatch):
        monkeypatch.delenv("TITLE_TOP_N", raising=False)
        assert EnvSettings(use_dotenv=False).get_int("TITLE_TOP_N", 3) == 3

    def test_get_int_from_env(self, monkeypatch):
        monkeypatch.setenv("TITLE_TOP_N", "5")
        assert EnvSettings(use_dotenv=False).get_int("TITLE_TOP_N", 3) == 5

    def test_get_int_invalid(self, monkeypatch):
        monkeypatch.setenv("PARAGRAPH_GAP", "wide")
        with pytest.raises(ValueError):
            EnvSettings(use_dotenv=False).get_int("PARAGRAPH_GAP", 20)

    @pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("0", False), ("off", False)])
    def test_get_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("SWAGGER_ENABLED", raw)
        assert EnvSettings(use_dotenv=False).get_bool("SWAGGER_ENABLED") is expected


class TestCli:
    def test_build_input_from_block_list(self, tmp_path):
        path = tmp_path / "blocks.json"
        path.write_text(json.dumps([{"text": "Hello World"}]), encoding="utf-8")
        data = main.build_input_from_file(path)
        assert [b.text for b in data.blocks] == ["Hello World"]

    def test_main_prints_result(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "blocks.json"
        path.write_text(
            json.dumps({"blocks": [{"text": "Event at Central Park"}], "context": {"request_id": "cli"}}),
            encoding="utf-8",
        )
        monkeypatch.setattr("sys.argv", ["main.py", str(path)])
        monkeypatch.setenv("SERVE", "0")
        main.main()
        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{\n"):])
        assert payload["meta"]["request_id"] == "cli"
        assert payload["raw"]["location"] == "Central Park"

    def test_main_usage(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["main.py"])
        monkeypatch.setenv("SERVE", "0")
        with pytest.raises(SystemExit) as exc:
            main.main()
        assert exc.value.code == 2

    def test_main_serve_reads_env_settings(self, monkeypatch):
        calls = {}
        monkeypatch.setattr("sys.argv", ["main.py"])
        monkeypatch.setenv("SERVE", "true")
        monkeypatch.setenv("DOMAIN", "127.0.0.1")
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setattr("uvicorn.run", lambda app, **kw: calls.update(app=app, **kw))
        main.main()
        assert calls["app"] == "event_ocr.transport.http.server:app"
        assert (calls["host"], calls["port"]) == ("127.0.0.1", 9090)
