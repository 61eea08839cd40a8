from __future__ import annotations

from ..errors import ConfigurationError
from .base import CatalogStore
from .config import StoreConfig
from .local_store import LocalCatalogStore
from .supabase_store import SupabaseCatalogStore

_local_store: LocalCatalogStore | None = None


def build_store(config: StoreConfig) -> CatalogStore:
    """Return the store selected by ``config.backend``.

    The local store is loaded once per process so ratings survive between
    requests.
    """
    global _local_store
    if config.backend == "supabase":
        return SupabaseCatalogStore(config)
    if config.backend == "local":
        if _local_store is None:
            _local_store = LocalCatalogStore.from_csv(config.catalog_csv)
        return _local_store
    raise ConfigurationError(f"Unknown CATALOG_BACKEND '{config.backend}'")


def reset_local_store() -> None:
    global _local_store
    _local_store = None
