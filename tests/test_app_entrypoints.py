import json

import pytest

import app
from word_walk import main as app_main


class _Speech:
    def __init__(self, available=True):
        self.available = available

    def is_available(self):
        return self.available

    async def speak(self, text, rate):
        return True

    def pause(self):
        pass

    def resume(self):
        pass

    def cancel(self):
        pass


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    catalog_path = tmp_path / "words.json"
    catalog_path.write_text(
        json.dumps({"groups": [{"id": 4, "name": "Four", "words": [{"word": "lucid"}]}]}),
        encoding="utf-8",
    )
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("WORDWALK_CATALOG_PATH", str(catalog_path))
    monkeypatch.setenv("TTS_PREWARM_ENABLED", "0")
    return catalog_path


def test_arg_parser_accepts_session_options():
    args = app.build_arg_parser().parse_args(
        ["--catalog", "x.json", "--group", "3", "--rate", "fast", "--mode", "revise"]
    )

    assert args.catalog == "x.json"
    assert args.group == 3
    assert args.rate == "fast"
    assert args.mode == "revise"


def test_arg_parser_rejects_unknown_rate():
    with pytest.raises(SystemExit):
        app.build_arg_parser().parse_args(["--rate", "warp"])


def test_launch_runs_console_with_built_services(monkeypatch, app_env):
    seen = {}
    real_initialize = app.initialize_app_services

    def initialize(config, logger, **kwargs):
        seen["kwargs"] = kwargs
        return real_initialize(config, logger, speech_service=_Speech(available=False), **kwargs)

    async def fake_run_console(services):
        seen["controller"] = services.controller

    monkeypatch.setattr(app, "initialize_app_services", initialize)
    monkeypatch.setattr(app, "run_console", fake_run_console)

    assert app.launch(["--group", "4", "--mode", "revise"]) == 0
    assert seen["kwargs"] == {"catalog_path": str(app_env), "group_id": 4, "rate": None, "mode": "revise"}
    assert seen["controller"].snapshot().group_name == "Four"
    assert seen["controller"].mode == "revise"


def test_launch_returns_error_code_for_bad_catalog(monkeypatch, app_env, tmp_path):
    monkeypatch.setattr(app, "run_console", lambda services: pytest.fail("console must not start"))

    assert app.launch(["--catalog", str(tmp_path / "missing.json")]) == 2


def test_module_main_exits_with_launch_code(monkeypatch):
    monkeypatch.setattr(app, "launch", lambda: 3)

    with pytest.raises(SystemExit) as excinfo:
        app_main.main()

    assert excinfo.value.code == 3


def test_launch_resolves_relative_catalog_against_project_root(monkeypatch, app_env, tmp_path):
    seen = {}
    real_initialize = app.initialize_app_services

    def initialize(config, logger, **kwargs):
        seen["catalog_path"] = kwargs["catalog_path"]
        return real_initialize(config, logger, speech_service=_Speech(), **kwargs)

    async def fake_run_console(services):
        pass

    monkeypatch.setenv("FILE_LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(app, "BASE_DIR", str(tmp_path))
    monkeypatch.setattr(app, "initialize_app_services", initialize)
    monkeypatch.setattr(app, "run_console", fake_run_console)

    assert app.launch(["--catalog", "words.json"]) == 0

    assert seen["catalog_path"] == str(tmp_path / "words.json")
    log_text = "".join(path.read_text(encoding="utf-8") for path in (tmp_path / "logs").glob("*.log"))
    assert f"CATALOG={tmp_path / 'words.json'}" in log_text
