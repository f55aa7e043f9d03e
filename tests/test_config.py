import pytest

from booksearch.config import DEFAULT_HTTP_TIMEOUT, Settings


def test_defaults_without_environment(monkeypatch):
    for name in ("OPENAI_API_KEY", "HTTP_TIMEOUT", "OPENAI_MODEL"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.openai_api_key == ""
    assert settings.openai_model == "gpt-3.5-turbo"
    assert settings.http_timeout == DEFAULT_HTTP_TIMEOUT


def test_reads_timeout(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT", "5.5")
    assert Settings.from_env().http_timeout == 5.5


@pytest.mark.parametrize("raw", ["soon", "-1", "0", "nan"])
def test_unusable_timeout_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("HTTP_TIMEOUT", raw)
    assert Settings.from_env().http_timeout == DEFAULT_HTTP_TIMEOUT
