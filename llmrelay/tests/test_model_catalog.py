"""Model catalog: built-ins, file loading and lookups."""
from __future__ import annotations

import pytest

from llmrelay.base.models import ModelInfo
from llmrelay.base.repositories import ModelCatalog
from llmrelay.base.repositories.model_catalog import CATALOG_FILE_ENV, load_catalog_file


def test_builtin_entries_resolve_providers():
    catalog = ModelCatalog()
    info = catalog.get_model_info("claude-3-5-sonnet-20241022")
    assert info is not None and info.provider == "anthropic"  # nosec B101
    assert info.supports("autocoding") and not info.supports("nonexistent")  # nosec B101
    assert catalog.get_model_info("no-such-model") is None  # nosec B101
    assert {"anthropic", "openai", "google", "cohere", "mistral", "ollama"} <= set(catalog.providers())  # nosec B101


def test_list_models_is_sorted_and_filterable():
    catalog = ModelCatalog()
    ids = [m.id for m in catalog.list_models("openai")]
    assert ids == sorted(ids) and "gpt-4o" in ids  # nosec B101
    assert all(m.provider == "google" for m in catalog.list_models("gemini"))  # nosec B101


def test_single_provider_file_overrides_builtin(tmp_path):
    path = tmp_path / "ollama.yaml"
    path.write_text(
        "provider: ollama\n"
        "endpoint: http://gpu-box:11434\n"
        "models:\n"
        "  - id: llama3\n"
        "    capabilities: [autocoding]\n"
        "  - qwen2.5-coder\n",
        encoding="utf-8",
    )
    catalog = ModelCatalog(catalog_file=str(path))
    llama = catalog.get_model_info("llama3")
    assert llama.endpoint == "http://gpu-box:11434" and llama.supports("autocoding")  # nosec B101
    assert catalog.get_model_info("qwen2.5-coder").provider == "ollama"  # nosec B101


def test_multi_provider_file_from_env(tmp_path, monkeypatch: pytest.MonkeyPatch, log_events):
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "providers:\n"
        "  - provider: mistral\n"
        "    models:\n"
        "      - id: mistral-large-latest\n"
        "        capabilities: {tools: true}\n"
        "  - provider: claude\n"
        "    models: [claude-3-haiku-20240307]\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CATALOG_FILE_ENV, str(path))
    catalog = ModelCatalog(include_builtin=False)
    assert [m.id for m in catalog.list_models()] == ["claude-3-haiku-20240307", "mistral-large-latest"]  # nosec B101
    assert catalog.get_model_info("claude-3-haiku-20240307").provider == "anthropic"  # nosec B101
    loaded = next(e for e in log_events if e["event"] == "catalog.loaded")
    assert loaded["count"] == 2  # nosec B101


def test_loader_rejects_bad_documents(tmp_path):
    bad_root = tmp_path / "list.yaml"
    bad_root.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog_file(bad_root)
    no_id = tmp_path / "noid.yaml"
    no_id.write_text("provider: openai\nmodels:\n  - name: Nameless\n", encoding="utf-8")
    with pytest.raises(ValueError, match="id"):
        load_catalog_file(no_id)


def test_register_and_round_trip():
    catalog = ModelCatalog(include_builtin=False)
    catalog.register(ModelInfo(id="x", provider="openai", capabilities={"vision": True}))
    info = catalog.get_model_info("x")
    assert ModelInfo.from_dict(info.to_dict()) == info  # nosec B101
