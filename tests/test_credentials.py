"""Tests for API key storage and lookup."""

import pytest

from i18n_adapt.credentials import KeyManager, mask_key


@pytest.fixture
def km(tmp_path, monkeypatch):
    for var in ("GEMINI_API_KEY", "OPENAI_API_KEY", "GOOGLE_API_KEY", "AZURE_TRANSLATOR_KEY"):
        monkeypatch.delenv(var, raising=False)
    return KeyManager(config_dir=tmp_path, use_keyring=False)


class TestKeyManager:

    def test_missing_key(self, km):
        assert km.get_key("gemini") is None
        assert km.get_key_info("gemini").source == "none"

    def test_env_takes_priority(self, km, monkeypatch):
        km.set_key("gemini", "from-config")
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert km.get_key("gemini") == "from-env"
        assert km.get_key_info("gemini").source == "env"

    def test_config_file_fallback(self, km):
        assert km.set_key("openai", "sk-0123456789abcdef") == "config"
        assert km.get_key("OpenAI") == "sk-0123456789abcdef"
        assert oct(km.config_file.stat().st_mode & 0o777) == "0o600"

    def test_delete(self, km):
        km.set_key("gemini", "abc")
        assert km.delete_key("gemini")
        assert km.get_key("gemini") is None
        assert not km.delete_key("gemini")

    def test_list_covers_all_services(self, km):
        services = [info.service for info in km.list_keys()]
        assert services == ["gemini", "openai", "google", "azure"]

    def test_unreadable_config_ignored(self, km):
        km.config_file.write_text("{broken", encoding="utf-8")
        assert km.get_key("gemini") is None


def test_mask_key():
    assert mask_key("short") == "*****"
    assert mask_key("AIzaSyA-1234567890") == "AIza...7890"
