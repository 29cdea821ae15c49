"""Client registry: construction, reuse and invalidation of chat clients.

One adapter is cached per ``(provider, model)`` pair under the key
``"<provider>-<model or 'default'>"``. Construction requires a credential for
every provider outside ``CREDENTIAL_FREE_PROVIDERS``; without one nothing is
built and the caller receives a failed :class:`ClientResult` carrying the
``APIKey.<provider>.Missing`` message.

The registry is an explicit object. ``build_registry`` wires the default
repositories; there is no module-level singleton.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional

from ..base.constants import CREDENTIAL_FREE_PROVIDERS
from ..base.errors import ClientInitError, MissingCredentialError, UnsupportedProviderError
from ..base.factory import ProviderFactory
from ..base.interfaces import ChatClient, CredentialProvider, ModelInfoSource
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ClientResult, ProviderConfig
from ..base.repositories import KeysRepository, ModelCatalog
from ..config import get_provider_config
from ..config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ..config.env import canonical_provider

ConfigLoader = Callable[[str], Dict[str, Any]]


def cache_key(provider: str, model: Optional[str]) -> str:
    """Return the cache key for a provider/model pair."""
    return f"{provider}-{model or 'default'}"


class ClientRegistry:
    """Thread-safe cache of chat clients keyed by provider and model.

    Concurrent first use of one key constructs exactly one adapter: the map is
    checked without the lock, then re-checked and filled under it.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        models: ModelInfoSource,
        *,
        factory: Any = ProviderFactory,
        config_loader: ConfigLoader = get_provider_config,
    ) -> None:
        self._credentials = credentials
        self._models = models
        self._factory = factory
        self._config_loader = config_loader
        self._lock = threading.Lock()
        self._clients: Dict[str, ChatClient] = {}
        self._logger = get_logger("di.registry")

    @property
    def credentials(self) -> CredentialProvider:
        return self._credentials

    @property
    def models(self) -> ModelInfoSource:
        return self._models

    def create_client(self, provider_id: str, model_id: Optional[str] = None) -> ClientResult:
        """Return the cached client for the pair, constructing it on first use.

        Raises
        ------
        UnsupportedProviderError
            If ``provider_id`` names no known backend.
        """
        provider = canonical_provider(provider_id)
        key = cache_key(provider, model_id)
        ctx = LogContext(provider=provider, model=model_id)

        client = self._clients.get(key)
        if client is not None:
            log_event(self._logger, "registry.cache_hit", ctx, key=key)
            return ClientResult.ok(client)

        if not self._factory.is_supported(provider):
            raise UnsupportedProviderError(provider_id)

        with self._lock:
            client = self._clients.get(key)
            if client is not None:
                log_event(self._logger, "registry.cache_hit", ctx, key=key)
                return ClientResult.ok(client)

            credential_free = provider in CREDENTIAL_FREE_PROVIDERS
            api_key = None if credential_free else self._credentials.get_api_key(provider)
            if not api_key and not credential_free:
                err = MissingCredentialError(provider, model_id)
                log_event(self._logger, "registry.missing_credential", ctx, error_code=err.code.value)
                return ClientResult.failed(err)

            try:
                config = self._build_config(provider, model_id, api_key)
                client = self._factory.create(config)
            except UnsupportedProviderError:
                raise
            except Exception as exc:
                err = ClientInitError(provider, model_id, exc)
                log_event(
                    self._logger,
                    "registry.init_failed",
                    ctx,
                    error_code=err.code.value,
                    error=str(exc),
                )
                return ClientResult.failed(err)

            self._clients[key] = client
        log_event(self._logger, "registry.create", ctx, key=key, resolved_model=client.model)
        return ClientResult.ok(client)

    def _build_config(self, provider: str, model_id: Optional[str], api_key: Optional[str]) -> ProviderConfig:
        settings = self._config_loader(provider)
        info = self._models.get_model_info(model_id) if model_id else None
        endpoint = (info.endpoint if info else None) or settings.get("base_url")
        return ProviderConfig(
            provider_id=provider,
            model_id=model_id or settings.get("model"),
            api_key=api_key,
            endpoint=endpoint,
            temperature=settings.get("temperature", DEFAULT_TEMPERATURE),
            max_tokens=settings.get("max_tokens", DEFAULT_MAX_TOKENS),
            timeout_seconds=settings.get("timeout_seconds"),
        )

    def get_instance(self, provider_id: str, model_id: Optional[str] = None) -> Optional[ChatClient]:
        """Pure lookup: the cached client or ``None``."""
        return self._clients.get(cache_key(canonical_provider(provider_id), model_id))

    def invalidate(self, provider_id: str) -> int:
        """Drop every cached client of ``provider_id``. Returns the count removed.

        Streams already holding a removed client keep running.
        """
        provider = canonical_provider(provider_id)
        with self._lock:
            doomed = [k for k in self._clients if k.split("-", 1)[0] == provider]
            for k in doomed:
                del self._clients[k]
        log_event(self._logger, "registry.invalidate", LogContext(provider=provider), removed=len(doomed))
        return len(doomed)

    def reset(self) -> None:
        """Clear the whole cache."""
        with self._lock:
            self._clients.clear()

    def bind_credential_events(self, keys_repo: KeysRepository) -> None:
        """Invalidate a provider's clients whenever its stored key changes."""
        keys_repo.add_listener(self.invalidate)

    def __len__(self) -> int:
        return len(self._clients)


def build_registry(
    credentials: Optional[CredentialProvider] = None,
    models: Optional[ModelInfoSource] = None,
    **kwargs: Any,
) -> ClientRegistry:
    """Construct a registry wired to the default repositories.

    When the credential source is a :class:`KeysRepository`, key changes are
    bound to invalidation automatically.
    """
    creds = credentials if credentials is not None else KeysRepository()
    registry = ClientRegistry(creds, models if models is not None else ModelCatalog(), **kwargs)
    if isinstance(creds, KeysRepository):
        registry.bind_credential_events(creds)
    return registry


__all__ = ["ClientRegistry", "build_registry", "cache_key"]
