from __future__ import annotations

from pathlib import Path

import pytest

from historian.server.core.config import OpenRouterConfig, Settings

_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OPENROUTER_BASE_URL",
    "HISTORIAN_MEMORY_FILE",
    "HISTORIAN_SEED_FILE",
    "HISTORIAN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.openrouter.api_key is None
    assert settings.openrouter.has_credential is False
    assert settings.openrouter.model == "perplexity/sonar-pro"
    assert settings.openrouter.base_url == "https://openrouter.ai/api/v1"
    assert settings.knowledge.memory_file == Path("data/memory.json")
    assert settings.knowledge.seed_file is None
    assert settings.log_level == "INFO"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")
    monkeypatch.setenv("OPENROUTER_MODEL", "perplexity/sonar")
    monkeypatch.setenv("HISTORIAN_MEMORY_FILE", str(tmp_path / "m.json"))
    monkeypatch.setenv("HISTORIAN_SEED_FILE", str(tmp_path / "seed.json"))

    settings = Settings(_env_file=None)

    assert settings.openrouter.api_key == "sk-env"
    assert settings.openrouter.has_credential is True
    assert settings.openrouter.model == "perplexity/sonar"
    assert settings.knowledge.memory_file == tmp_path / "m.json"
    assert settings.knowledge.seed_file == tmp_path / "seed.json"


def test_reads_dotenv_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OPENROUTER_API_KEY=sk-dotenv\nHISTORIAN_LOG_LEVEL=DEBUG\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)

    assert settings.openrouter.api_key == "sk-dotenv"
    assert settings.log_level == "DEBUG"


def test_empty_credential_counts_as_absent() -> None:
    assert OpenRouterConfig(api_key="").has_credential is False
