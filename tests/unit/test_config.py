from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

import pytest

from pouchctl.config import (
    DaemonConfig,
    LoggingConfig,
    get_default_config,
    load_config,
    load_dotenv_config,
    load_yaml_config,
    merge_config,
)
from pouchctl.exceptions import ConfigError
from pouchctl.utils.logging import JSONFormatter, setup_logging


def _args(**overrides) -> Namespace:
    values = dict(
        host=None, api_version=None, timeout=None, config=None, debug=False, log_file=None
    )
    values.update(overrides)
    return Namespace(**values)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for key in ("POUCH_HOST", "POUCH_API_VERSION", "POUCH_TIMEOUT", "POUCH_LOG_LEVEL", "POUCH_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def test_defaults_when_nothing_configured(isolated) -> None:
    daemon, log_cfg = load_config(_args())
    assert daemon == DaemonConfig(
        host="unix:///var/run/pouchd.sock", api_version="1.24", timeout=60
    )
    assert log_cfg == LoggingConfig(level="WARNING", file=None)


def test_precedence_cli_over_env_over_dotenv_over_file(isolated, monkeypatch) -> None:
    (isolated / "pouch.yaml").write_text(
        "daemon:\n  host: tcp://file:4243\n  timeout: 5\n  api_version: '1.30'\n",
        encoding="utf-8",
    )
    (isolated / ".env").write_text(
        "POUCH_HOST=tcp://dotenv:4243\nPOUCH_TIMEOUT=7\n", encoding="utf-8"
    )
    monkeypatch.setenv("POUCH_HOST", "tcp://env:4243")

    daemon, _ = load_config(_args())
    assert daemon.host == "tcp://env:4243"
    assert daemon.timeout == 7
    assert daemon.api_version == "1.30"

    daemon, _ = load_config(_args(host="unix:///tmp/cli.sock", timeout=9))
    assert daemon.host == "unix:///tmp/cli.sock"
    assert daemon.timeout == 9


def test_debug_flag_sets_debug_level(isolated) -> None:
    _, log_cfg = load_config(_args(debug=True, log_file=Path("out.jsonl")))
    assert log_cfg.level == "DEBUG"
    assert log_cfg.file == "out.jsonl"


def test_explicit_missing_config_raises(isolated) -> None:
    with pytest.raises(ConfigError, match="config file not found"):
        load_yaml_config(isolated / "nope.yaml")


def test_explicit_non_mapping_config_raises(isolated) -> None:
    path = isolated / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="expected mapping"):
        load_config(_args(config=path))


def test_invalid_timeout_rejected(isolated, monkeypatch) -> None:
    monkeypatch.setenv("POUCH_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="daemon.timeout"):
        load_config(_args())


def test_merge_config_ignores_unset_cli_values() -> None:
    merged = merge_config(
        {"daemon": {"host": None, "timeout": 3}},
        {},
        {},
        {"daemon": {"host": "tcp://file"}},
        get_default_config(),
    )
    assert merged["daemon"]["host"] == "tcp://file"
    assert merged["daemon"]["timeout"] == 3
    assert get_default_config()["daemon"]["timeout"] == 60


def test_dotenv_ignores_unrelated_keys(isolated) -> None:
    (isolated / ".env").write_text("OTHER=1\nPOUCH_LOG_LEVEL=info\n", encoding="utf-8")
    assert load_dotenv_config() == {"logging": {"level": "info"}}


def test_setup_logging_writes_json_lines(tmp_path) -> None:
    log_file = tmp_path / "logs" / "pouch.jsonl"
    setup_logging("WARNING", str(log_file))
    logging.getLogger("pouchctl.test").debug("hello %s", "world", extra={"image": "busybox"})
    for handler in logging.getLogger("pouchctl").handlers:
        handler.flush()

    entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert entry["message"] == "hello world"
    assert entry["level"] == "DEBUG"
    assert entry["component"] == "pouchctl.test"
    assert entry["image"] == "busybox"


def test_json_formatter_stringifies_unserializable_extras() -> None:
    record = logging.LogRecord("pouchctl", logging.INFO, __file__, 1, "msg", None, None)
    record.path = Path("/dev/sda")
    assert json.loads(JSONFormatter().format(record))["path"] == "/dev/sda"
