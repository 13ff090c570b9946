from studio.core.config import StudioConfig, load_config, resolve_api_key


def test_resolve_api_key_prefers_explicit(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-value")
    assert resolve_api_key(" explicit ", "GEMINI_API_KEY") == "explicit"


def test_resolve_api_key_falls_back_to_first_non_empty_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-value")
    assert resolve_api_key(None, "GEMINI_API_KEY", "GOOGLE_API_KEY") == "google-value"


def test_load_config_without_keys(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    config = load_config()
    assert config == StudioConfig(gemini_api_key="")
    assert config.has_credentials is False


def test_load_config_reads_gemini_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-value")
    assert load_config().gemini_api_key == "gemini-value"
