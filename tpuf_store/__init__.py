"""turbopuffer-backed document store with embeddings.

Subpackages:
- ``tpuf_store.common``: configuration and structured logging.
- ``tpuf_store.vector_store``: the vector store interface and the
  turbopuffer adapter.

Usage:
- ``store = TurbopufferVectorStore(embeddings, namespace="docs")``
- ``await store.add_documents(docs)``
- ``await store.similarity_search_vector_with_score(vector, k=4)``
"""

from .vector_store import Document, TurbopufferVectorStore

__version__ = "0.1.0"

__all__ = ["Document", "TurbopufferVectorStore", "__version__"]
