import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from simulark.common.errors import RegistryConfigError, UnknownProviderError
from simulark.common.logging_config import ApiKeyFilter
from simulark.common.models import ModelInfo, ProviderDescriptor

logger = logging.getLogger("Simulark")


class ProviderRegistry:
    """Immutable lookup of provider descriptors and the model catalog.

    Built once at startup. Model selection goes through an explicit table from
    canonical model id to provider, validated here rather than inferred from
    substrings of the model name.
    """

    def __init__(
        self,
        providers: Mapping[str, ProviderDescriptor],
        models: Mapping[str, ModelInfo],
        primary: str,
        fallback: str,
        aliases: Optional[Mapping[str, str]] = None,
    ):
        self._providers = dict(providers)
        self._models = dict(models)
        self._aliases = dict(aliases or {})
        self.primary = primary
        self.fallback = fallback
        self._validate()

    def _validate(self):
        for role, provider_id in (("primary", self.primary), ("fallback", self.fallback)):
            if provider_id not in self._providers:
                raise RegistryConfigError(f"{role} provider '{provider_id}' is not configured")

        for model_id, info in self._models.items():
            if info.provider not in self._providers:
                raise RegistryConfigError(
                    f"model '{model_id}' points to unknown provider '{info.provider}'"
                )

        for alias, target in self._aliases.items():
            if target not in self._models:
                raise RegistryConfigError(f"alias '{alias}' points to unknown model '{target}'")

    @classmethod
    def from_config(cls, config: Dict[str, Any], env: Optional[Mapping[str, str]] = None):
        """Builds the registry from the CONFIG dict, reading credentials from `env`.

        Missing credentials are logged, not fatal: the call is still attempted
        and the provider's own auth error becomes the surfaced failure.
        """
        env = os.environ if env is None else env

        providers = {}
        for provider_id, settings in config["providers"].items():
            api_key = env.get(settings["api_key_env"]) or None
            if not api_key:
                logger.warning(
                    f"[Registry] {settings['api_key_env']} is not set; calls to '{provider_id}' will fail authentication"
                )
            providers[provider_id] = ProviderDescriptor(
                id=provider_id,
                base_url=settings["base_url"],
                api_key=api_key,
                model=settings["model"],
                request_params=settings.get("request_params", {}),
                headers=settings.get("headers", {}),
                timeout=settings.get("timeout", 30.0),
            )

        ApiKeyFilter.add_sensitive_keys([p.api_key for p in providers.values() if p.api_key])

        models = {
            model_id: ModelInfo(id=model_id, **entry)
            for model_id, entry in config.get("models", {}).items()
        }

        routing = config["routing"]
        registry = cls(
            providers=providers,
            models=models,
            primary=routing["primary_provider"],
            fallback=routing["fallback_provider"],
            aliases=config.get("model_aliases", {}),
        )
        logger.info(
            f"[Registry] Loaded {len(providers)} providers and {len(models)} models "
            f"(primary={registry.primary}, fallback={registry.fallback})"
        )
        return registry

    def get(self, provider_id: str) -> ProviderDescriptor:
        try:
            return self._providers[provider_id]
        except KeyError:
            raise UnknownProviderError(provider_id) from None

    @property
    def provider_ids(self) -> List[str]:
        return list(self._providers)

    def resolve_model(self, model_id: Optional[str]) -> Optional[ModelInfo]:
        """Maps a requested model id (canonical or alias) to its catalog entry.

        Returns None when the id is empty or unknown.
        """
        if not model_id:
            return None
        canonical = self._aliases.get(model_id, model_id)
        return self._models.get(canonical)

    def get_model_info(self, model_id: str) -> Optional[ModelInfo]:
        return self.resolve_model(model_id)

    def list_models(self) -> List[ModelInfo]:
        return list(self._models.values())

    def models_for_provider(self, provider_id: str) -> List[ModelInfo]:
        return [m for m in self._models.values() if m.provider == provider_id]
