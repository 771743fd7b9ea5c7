from __future__ import annotations

from vlist.runtime.config import (
    get_config,
    initialize_config,
    load_config,
    normalize_failure_policy,
    resolve_log_level_name,
    set_config,
)


def test_load_config_defaults_without_env() -> None:
    cfg = load_config(env={})

    assert cfg.buffer_size == 5
    assert cfg.nominal_item_height == 0.0
    assert cfg.render_failure_policy == "abort"
    assert cfg.logging.level_name == "INFO"
    assert cfg.logging.console_format == "text"
    assert cfg.logging.file_path is None


def test_load_config_parses_values() -> None:
    cfg = load_config(
        env={
            "VLIST_BUFFER_SIZE": " 8 ",
            "VLIST_NOMINAL_ITEM_HEIGHT": "32.5",
            "VLIST_RENDER_FAILURE_POLICY": "Skip",
            "VLIST_LOG_LEVEL": "debug",
            "VLIST_LOG_FORMAT": "JSON",
            "VLIST_LOG_FILE": "logs/vlist.log",
        }
    )

    assert cfg.buffer_size == 8
    assert cfg.nominal_item_height == 32.5
    assert cfg.render_failure_policy == "skip"
    assert cfg.logging.level_name == "DEBUG"
    assert cfg.logging.console_format == "json"
    assert cfg.logging.file_path == "logs/vlist.log"


def test_load_config_clamps_and_falls_back_on_bad_values() -> None:
    cfg = load_config(
        env={
            "VLIST_BUFFER_SIZE": "-3",
            "VLIST_NOMINAL_ITEM_HEIGHT": "tall",
            "VLIST_RENDER_FAILURE_POLICY": "explode",
            "VLIST_LOG_FORMAT": "xml",
        }
    )

    assert cfg.buffer_size == 0
    assert cfg.nominal_item_height == 0.0
    assert cfg.render_failure_policy == "abort"
    assert cfg.logging.console_format == "text"


def test_normalize_failure_policy_uses_fallback() -> None:
    assert normalize_failure_policy(" ABORT ") == "abort"
    assert normalize_failure_policy("", fallback="skip") == "skip"


def test_resolve_log_level_prefers_package_prefix() -> None:
    assert resolve_log_level_name(env={"LOG_LEVEL": "WARNING", "VLIST_LOG_LEVEL": "ERROR"}) == "ERROR"
    assert resolve_log_level_name(env={"LOG_LEVEL": "warning"}) == "WARNING"


def test_resolve_log_level_reads_process_env(monkeypatch) -> None:
    monkeypatch.delenv("VLIST_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "critical")

    assert resolve_log_level_name() == "CRITICAL"


def test_get_config_caches_initialized_value() -> None:
    original = get_config()
    try:
        cfg = initialize_config(env={"VLIST_BUFFER_SIZE": "11"})
        assert get_config() is cfg
        assert get_config().buffer_size == 11
    finally:
        set_config(original)
