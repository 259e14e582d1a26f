from xmpptrace.core.config import Settings, get_settings
from xmpptrace.core.constants import UNREADABLE_TEXT


def test_defaults():
    cfg = Settings()
    assert cfg.unreadable_text == UNREADABLE_TEXT == "[data not readable]"
    assert cfg.max_text_payload == 65535
    assert cfg.truncation_marker == "\n[TRUNCATED]"
    assert cfg.dump_record_prefix == "tcp"
    assert cfg.dump_errors == "replace"
    assert ".pcap" in cfg.pcap_suffixes


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("XMPPTRACE_MAX_TEXT_PAYLOAD", "1024")
    monkeypatch.setenv("XMPPTRACE_LOG_LEVEL", "DEBUG")
    cfg = Settings()
    assert cfg.max_text_payload == 1024
    assert cfg.log_level == "DEBUG"


def test_settings_are_cached():
    assert get_settings() is get_settings()
