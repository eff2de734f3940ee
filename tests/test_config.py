import pytest
from pydantic import ValidationError

from adapters.session_store import MemoryTokenStore
from core.config import (
    TOKEN_ENV_VAR,
    AppSettings,
    get_user_env_file,
    remove_user_env_vars,
    write_user_env_vars,
)


def test_defaults():
    settings = AppSettings(_env_file=None)
    assert settings.base_url == "http://localhost:8080"
    assert settings.api_path == "/api"
    assert settings.api_root == "http://localhost:8080/api"
    assert settings.api_token is None
    assert settings.verify_tls is True


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("DTRACK_CONSOLE_BASE_URL", "https://dtrack.example.com/")
    monkeypatch.setenv("DTRACK_CONSOLE_API_PATH", "backend/api/")
    monkeypatch.setenv("DTRACK_CONSOLE_API_TOKEN", "  tok  ")
    monkeypatch.setenv("DTRACK_CONSOLE_HTTP_TIMEOUT_SECONDS", "5")

    settings = AppSettings(_env_file=None)

    assert settings.api_root == "https://dtrack.example.com/backend/api"
    assert settings.api_token == "tok"
    assert settings.http_timeout_seconds == 5.0


@pytest.mark.parametrize("raw, expected", [("", ""), ("/", ""), ("api", "/api"), ("/a/b/", "/a/b")])
def test_api_path_normalization(raw, expected):
    assert AppSettings(_env_file=None, api_path=raw).api_path == expected


def test_blank_token_means_no_token():
    assert AppSettings(_env_file=None, api_token="   ").api_token is None


def test_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, http_timeout_seconds=0)


def test_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DTRACK_CONSOLE_BASE_URL=http://from-file:9000\n", encoding="utf-8")

    assert AppSettings(_env_file=str(env_file)).base_url == "http://from-file:9000"


def test_write_and_remove_user_env_vars():
    path = write_user_env_vars({TOKEN_ENV_VAR: "abc", "DTRACK_CONSOLE_BASE_URL": "http://x", "SKIPPED": None})

    assert path == get_user_env_file()
    text = path.read_text(encoding="utf-8")
    assert f"{TOKEN_ENV_VAR}=abc" in text
    assert "DTRACK_CONSOLE_BASE_URL=http://x" in text
    assert "SKIPPED" not in text

    write_user_env_vars({TOKEN_ENV_VAR: "def"})
    assert f"{TOKEN_ENV_VAR}=def" in path.read_text(encoding="utf-8")

    remove_user_env_vars(TOKEN_ENV_VAR, "NOT_THERE")
    text = path.read_text(encoding="utf-8")
    assert TOKEN_ENV_VAR not in text
    assert "DTRACK_CONSOLE_BASE_URL=http://x" in text


def test_user_env_file_feeds_settings():
    write_user_env_vars({TOKEN_ENV_VAR: "persisted"})
    assert AppSettings(_env_file=str(get_user_env_file())).api_token == "persisted"


def test_memory_token_store_seeded_from_settings():
    store = MemoryTokenStore.from_settings(AppSettings(_env_file=None, api_token="seed"))
    assert store.get() == "seed"
    store.set("")
    assert store.get() is None
    store.set("next")
    store.clear()
    assert store.get() is None
