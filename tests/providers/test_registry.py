import pytest

from simulark.common.errors import RegistryConfigError, UnknownProviderError
from simulark.common.logging_config import ApiKeyFilter
from simulark.config.default_config import CONFIG
from simulark.providers.registry import ProviderRegistry

TEST_ENV = {
    "ZHIPU_API_KEY": "zhipu-id.zhipu-secret-value",
    "OPENROUTER_API_KEY": "sk-or-v1-abcdefghijklmnopqrstuvwxyz",
}


@pytest.fixture
def registry():
    return ProviderRegistry.from_config(CONFIG, env=TEST_ENV)


def _config(**routing):
    config = dict(CONFIG)
    config["routing"] = {"primary_provider": "zhipu", "fallback_provider": "openrouter", **routing}
    return config


def test_loads_all_providers(registry):
    assert set(registry.provider_ids) == {"zhipu", "openrouter", "kimi", "nvidia", "qwen"}
    zhipu = registry.get("zhipu")
    assert zhipu.api_key == TEST_ENV["ZHIPU_API_KEY"]
    assert zhipu.request_params == {"thinking": {"type": "enabled"}}
    assert zhipu.timeout == 30.0


def test_missing_credential_is_not_fatal(registry):
    kimi = registry.get("kimi")
    assert kimi.api_key is None
    assert not kimi.has_credential


def test_credentials_are_registered_for_masking(registry):
    assert TEST_ENV["ZHIPU_API_KEY"] in ApiKeyFilter.KNOWN_KEYS


def test_unknown_provider_lookup_raises(registry):
    with pytest.raises(UnknownProviderError):
        registry.get("does-not-exist")


def test_resolve_model_by_canonical_id_and_alias(registry):
    canonical = registry.resolve_model("nvidia:z-ai/glm5")
    assert canonical.provider == "nvidia"
    assert canonical.model == "z-ai/glm5"

    aliased = registry.resolve_model("arcee-ai")
    assert aliased.id == "openrouter:arcee-ai/trinity-large-preview:free"
    assert aliased.provider == "openrouter"

    assert registry.resolve_model("gpt-9000") is None
    assert registry.resolve_model(None) is None


def test_model_listing(registry):
    assert len(registry.list_models()) == len(CONFIG["models"])
    nvidia_models = {m.id for m in registry.models_for_provider("nvidia")}
    assert "nvidia:moonshotai/kimi-k2.5" in nvidia_models
    assert all(m.provider == "nvidia" for m in registry.models_for_provider("nvidia"))
    assert registry.get_model_info("qwen-flash").name == "QWEN FLASH"


def test_unknown_primary_is_rejected():
    with pytest.raises(RegistryConfigError):
        ProviderRegistry.from_config(_config(primary_provider="nope"), env={})


def test_model_pointing_to_unknown_provider_is_rejected():
    config = _config()
    config["models"] = {
        **CONFIG["models"],
        "ghost:model": {"name": "Ghost", "provider": "ghost", "model": "model"},
    }
    with pytest.raises(RegistryConfigError):
        ProviderRegistry.from_config(config, env={})
