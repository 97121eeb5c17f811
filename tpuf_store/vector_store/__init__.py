"""Vector store adapters and utilities.

Primary components:
- ``base``: abstract ``VectorStore`` interface, ``Embeddings`` protocol and
  common exceptions.
- ``types``: ``Document``, ``QueryResult`` and ``DistanceMetric``.
- ``turbopuffer``: turbopuffer HTTP implementation of the interface.
- ``factory``: helpers to construct a store from typed config or env.

Guidance:
- Prefer constructing via ``factory.create_vector_store_from_env`` so callers
  stay decoupled from a specific backend.
"""

from .base import (
    Embeddings,
    MissingCredentialError,
    RemoteServiceError,
    ResponseDecodeError,
    ValidationError,
    VectorStore,
    VectorStoreError,
)
from .turbopuffer import TurbopufferVectorStore
from .types import DistanceMetric, Document, QueryResult

__all__ = [
    "DistanceMetric",
    "Document",
    "Embeddings",
    "MissingCredentialError",
    "QueryResult",
    "RemoteServiceError",
    "ResponseDecodeError",
    "TurbopufferVectorStore",
    "ValidationError",
    "VectorStore",
    "VectorStoreError",
]
