# tests/test_config.py
"""Tests for configuration loading and saving."""
import tomllib

from toli.config import AppConfig, BackendKind, ConfigManager
from toli.constants import DEFAULT_ADDITIONAL_CONTEXT


def test_missing_file_writes_defaults(temp_config):
    config = temp_config.load_config()

    assert temp_config.config_file.exists()
    assert config.backend == BackendKind.OLLAMA
    assert config.ollama.endpoint == "http://localhost:11434"
    assert config.ollama.model == "llama3.2"
    assert config.openai.model == "gpt-3.5-turbo"
    assert config.additional_context == DEFAULT_ADDITIONAL_CONTEXT

    with open(temp_config.config_file, "rb") as f:
        saved = tomllib.load(f)
    assert saved["backend"] == "ollama"
    assert saved["ollama"]["model"] == "llama3.2"


def test_load_existing_file(temp_config):
    temp_config.config_file.write_text(
        'backend = "OpenAI"\n'
        'additional_context = "arch linux, fish"\n'
        '[openai]\n'
        'api_key = "sk-file"\n'
        'model = "gpt-4o-mini"\n'
    )

    config = temp_config.load_config()

    assert config.backend == BackendKind.OPENAI
    assert config.openai.api_key == "sk-file"
    assert config.openai.model == "gpt-4o-mini"
    assert config.ollama is None
    assert config.additional_context == "arch linux, fish"


def test_invalid_toml_falls_back_to_defaults(temp_config):
    temp_config.config_file.write_text("backend = [unterminated")

    config = temp_config.load_config()

    assert config.backend == BackendKind.OLLAMA
    assert config.ollama is not None


def test_invalid_values_fall_back_to_defaults(temp_config):
    temp_config.config_file.write_text('backend = "gemini"\n')

    config = temp_config.load_config()

    assert config.backend == BackendKind.OLLAMA


def test_environment_overrides(temp_config, monkeypatch):
    temp_config.config_file.write_text('backend = "ollama"\n')
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("TOLI_BACKEND", "openai")
    monkeypatch.setenv("TOLI_OLLAMA_ENDPOINT", "http://gpu-box:11434")

    config = temp_config.load_config()

    assert config.backend == BackendKind.OPENAI
    assert config.openai.api_key == "sk-env"
    assert config.ollama.endpoint == "http://gpu-box:11434"


def test_unknown_backend_in_environment_is_ignored(temp_config, monkeypatch):
    monkeypatch.setenv("TOLI_BACKEND", "gemini")

    config = temp_config.load_config()

    assert config.backend == BackendKind.OLLAMA


def test_save_round_trip(tmp_path, clean_env):
    manager = ConfigManager(config_file=tmp_path / "nested" / "config.toml")
    manager.update(AppConfig(backend=BackendKind.OPENAI, additional_context="nixos"))
    manager.save_config()

    reloaded = ConfigManager(config_file=tmp_path / "nested" / "config.toml").load_config()

    assert reloaded.backend == BackendKind.OPENAI
    assert reloaded.additional_context == "nixos"
    assert reloaded.openai is None
