"""Tests for settings loading."""

import json

from multibooru.config import Settings


class TestSettings:

    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MULTIBOORU_SETTINGS_FILE", str(tmp_path / "missing.json"))
        monkeypatch.delenv("MULTIBOORU_USER_AGENT", raising=False)
        monkeypatch.delenv("MULTIBOORU_TIMEOUT", raising=False)
        settings = Settings()
        assert settings.USER_AGENT.startswith("Mozilla/5.0")
        assert settings.TIMEOUT == 30.0

    def test_settings_file(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "user_agent": "Custom/2.0",
            "credentials": {"yandere": {"user_id": "u", "api_key": "k"}},
        }))
        monkeypatch.setenv("MULTIBOORU_SETTINGS_FILE", str(path))
        monkeypatch.delenv("MULTIBOORU_USER_AGENT", raising=False)
        monkeypatch.delenv("MULTIBOORU_YANDERE_USER_ID", raising=False)
        monkeypatch.delenv("MULTIBOORU_YANDERE_API_KEY", raising=False)

        settings = Settings()

        assert settings.USER_AGENT == "Custom/2.0"
        assert settings.get_credentials("yandere") == ("u", "k")
        assert settings.get_credentials("konachan") is None

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"user_agent": "Custom/2.0", "timeout": 10}))
        monkeypatch.setenv("MULTIBOORU_SETTINGS_FILE", str(path))
        monkeypatch.setenv("MULTIBOORU_USER_AGENT", "Env/3.0")
        monkeypatch.setenv("MULTIBOORU_TIMEOUT", "5")

        settings = Settings()

        assert settings.USER_AGENT == "Env/3.0"
        assert settings.TIMEOUT == 5.0

    def test_credentials_need_both_values(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MULTIBOORU_SETTINGS_FILE", str(tmp_path / "missing.json"))
        monkeypatch.setenv("MULTIBOORU_GELBOORU_USER_ID", "42")
        monkeypatch.delenv("MULTIBOORU_GELBOORU_API_KEY", raising=False)
        assert Settings().get_credentials("gelbooru") is None
