"""
Tests for settings defaults.
"""


class TestSessionSettings:
    """Tests for SessionSettings."""

    def test_unset_key_is_random_per_instance(self, monkeypatch):
        from app.core.config.modules.session import SessionSettings

        monkeypatch.delenv("SESSION_SECRET_KEY", raising=False)
        first = SessionSettings().SESSION_SECRET_KEY.get_secret_value()
        second = SessionSettings().SESSION_SECRET_KEY.get_secret_value()

        assert first != second
        assert len(first) >= 32
        assert first != "your-secret-key-here-change-in-production"

    def test_configured_key_is_used(self, monkeypatch):
        from app.core.config.modules.session import SessionSettings

        monkeypatch.setenv("SESSION_SECRET_KEY", "configured-key")

        assert SessionSettings().SESSION_SECRET_KEY.get_secret_value() == "configured-key"
