"""Base vector store interface.

Defines the abstract contract callers depend on, independent of the backing
service. Concrete stores implement ``add_vectors`` and
``similarity_search_vector_with_score``; the text-level helpers below are
built on top of those two and the injected ``Embeddings`` provider.

All remote operations are asynchronous.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Protocol, Sequence, Tuple

from .types import Document, Vector


class Embeddings(Protocol):
    """Embedding provider consumed by vector stores.

    ``embed_documents`` returns one vector per input text, in input order.
    """

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        ...

    async def embed_query(self, text: str) -> List[float]:
        ...


class VectorStore(ABC):
    """Abstract base class for vector stores."""

    def __init__(self, embeddings: Embeddings):
        self.embeddings = embeddings

    @abstractmethod
    def vectorstore_type(self) -> str:
        """Short identifier of the backend (e.g. ``"turbopuffer"``)."""

    @abstractmethod
    async def add_vectors(
        self,
        vectors: Sequence[Vector],
        documents: Sequence[Document],
        ids: Optional[Sequence[int]] = None,
    ) -> List[int]:
        """Upload precomputed vectors paired with documents.

        Returns the ids the records were stored under.
        """

    @abstractmethod
    async def similarity_search_vector_with_score(
        self,
        query: Vector,
        k: int,
        filter: Optional[Any] = None,
    ) -> List[Tuple[Document, float]]:
        """Return the ``k`` nearest documents with their distance."""

    async def add_documents(
        self,
        documents: Sequence[Document],
        ids: Optional[Sequence[int]] = None,
    ) -> List[int]:
        """Embed ``documents`` in a single provider call, then upload them."""
        vectors = await self.embeddings.embed_documents(
            [doc.page_content for doc in documents]
        )
        return await self.add_vectors(vectors, documents, ids=ids)

    async def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: Optional[Any] = None,
    ) -> List[Tuple[Document, float]]:
        """Embed a text query and search with it."""
        query_vector = await self.embeddings.embed_query(query)
        return await self.similarity_search_vector_with_score(query_vector, k, filter)

    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: Optional[Any] = None,
    ) -> List[Document]:
        """Like ``similarity_search_with_score`` but drops the scores."""
        results = await self.similarity_search_with_score(query, k, filter)
        return [doc for doc, _ in results]


class VectorStoreError(Exception):
    """Base exception for vector store operations."""
    pass


class MissingCredentialError(VectorStoreError):
    """No API key could be resolved at construction time."""
    pass


class ValidationError(VectorStoreError):
    """Caller-supplied batch is empty or has inconsistent lengths."""
    pass


class RemoteServiceError(VectorStoreError):
    """Transport failure or non-2xx response from the remote service."""

    def __init__(
        self,
        message: str,
        operation: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class ResponseDecodeError(VectorStoreError):
    """Remote service answered with a body that is not valid JSON."""
    pass
