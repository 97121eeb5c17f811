"""Vector store factory.

Centralizes creation of concrete ``VectorStore`` backends so callers don't
depend on implementation details. New backends can be added without changing
call sites.
"""

from enum import Enum
from typing import Any, Dict, Mapping

import structlog

from ..common.config import DEFAULT_API_ENDPOINT, TurbopufferConfig
from .base import Embeddings, VectorStore
from .turbopuffer import TurbopufferVectorStore

logger = structlog.get_logger("vector_store.factory")


class VectorStoreType(Enum):
    """Supported vector store types."""
    TURBOPUFFER = "turbopuffer"


class VectorStoreFactory:
    """Factory for creating vector store instances."""

    @staticmethod
    def create(
        store_type: VectorStoreType,
        embeddings: Embeddings,
        config: Dict[str, Any],
        **kwargs: Any
    ) -> VectorStore:
        """Create a vector store instance.

        Parameters
        - store_type: A ``VectorStoreType`` enum value
        - embeddings: Embedding provider handed to the store
        - config: Backend-specific parameters (``api_key``, ``namespace``,
          ``api_endpoint`` for turbopuffer)
        - kwargs: Additional optional overrides forwarded to implementation
        """
        if store_type == VectorStoreType.TURBOPUFFER:
            store = TurbopufferVectorStore(
                embeddings,
                api_key=config.get("api_key"),
                namespace=config.get("namespace"),
                api_endpoint=config.get("api_endpoint"),
                **kwargs
            )
            logger.info(
                "Created vector store",
                store_type=store_type.value,
                namespace=store.namespace
            )
            return store

        raise ValueError(f"Unsupported vector store type: {store_type}")


def create_vector_store(
    store_type: str,
    embeddings: Embeddings,
    config: Dict[str, Any],
    **kwargs: Any
) -> VectorStore:
    """Convenience function to create a vector store from a type name."""
    try:
        store_type_enum = VectorStoreType(store_type)
    except ValueError:
        raise ValueError(f"Unsupported vector store type: {store_type}")
    return VectorStoreFactory.create(store_type_enum, embeddings, config, **kwargs)


def create_vector_store_from_env(
    embeddings: Embeddings,
    env_config: Mapping[str, str],
) -> VectorStore:
    """Create a vector store from environment-style configuration.

    Parameters
    - embeddings: Embedding provider handed to the store
    - env_config: A flat mapping of environment variable names to values,
      e.g. ``dict(os.environ)``; nothing is read from the process itself

    Returns
    - A ``VectorStore`` bound to ``TURBOPUFFER_NAMESPACE`` (or ``"default"``)
    """
    settings = TurbopufferConfig(
        _env_file=None,
        turbopuffer_api_key=env_config.get("TURBOPUFFER_API_KEY"),
        turbopuffer_api_endpoint=env_config.get("TURBOPUFFER_API_ENDPOINT", DEFAULT_API_ENDPOINT),
    )

    config = {
        "namespace": env_config.get("TURBOPUFFER_NAMESPACE"),
        "api_endpoint": settings.turbopuffer_api_endpoint,
    }
    return VectorStoreFactory.create(
        VectorStoreType.TURBOPUFFER, embeddings, config, settings=settings
    )
