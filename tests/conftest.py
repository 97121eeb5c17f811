"""Shared fixtures: a fake embedding provider and a recording HTTP transport."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from tpuf_store.vector_store.turbopuffer import TurbopufferVectorStore
from tpuf_store.vector_store.types import Document


class FakeEmbeddings:
    """Deterministic embedding provider that records its calls."""

    def __init__(self):
        self.document_calls: List[List[str]] = []
        self.query_calls: List[str] = []

    @staticmethod
    def vector_for(text: str) -> List[float]:
        return [float(len(text)), float(text.count(" ")), 1.0]

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.document_calls.append(list(texts))
        return [self.vector_for(text) for text in texts]

    async def embed_query(self, text: str) -> List[float]:
        self.query_calls.append(text)
        return self.vector_for(text)


class FailingEmbeddings(FakeEmbeddings):
    """Embedding provider whose batch call always fails."""

    async def embed_documents(self, texts: List[str]) -> List[List[float]]:
        raise RuntimeError("embedding backend unavailable")


class RecordingHandler:
    """``httpx.MockTransport`` handler that records requests and replays a canned response."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Optional[Dict[str, Any]] = None,
        content: Optional[bytes] = None,
        error: Optional[Callable[[httpx.Request], Exception]] = None,
    ):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {"status": "OK"}
        self.content = content
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def urls(self) -> List[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def embeddings() -> FakeEmbeddings:
    """Embedding provider producing 3-dimensional vectors."""
    return FakeEmbeddings()


@pytest.fixture
def handler() -> RecordingHandler:
    """Handler answering every request with 200 OK."""
    return RecordingHandler()


@pytest.fixture
def make_client() -> Callable[[RecordingHandler], httpx.AsyncClient]:
    """Build an ``httpx.AsyncClient`` routed through a recording handler."""
    def _make(handler: RecordingHandler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def make_store(embeddings, make_client) -> Callable[..., TurbopufferVectorStore]:
    """Build a store with a test API key whose requests hit ``handler``."""
    def _make(handler: RecordingHandler, **kwargs: Any) -> TurbopufferVectorStore:
        kwargs.setdefault("api_key", "test-key")
        return TurbopufferVectorStore(embeddings, client=make_client(handler), **kwargs)
    return _make


@pytest.fixture
def documents() -> List[Document]:
    """Three small documents with sources."""
    return [
        Document(page_content="the quick brown fox", metadata={"source": "a.txt"}),
        Document(page_content="jumps over", metadata={"source": "b.txt"}),
        Document(page_content="the lazy dog", metadata={"source": "c.txt"}),
    ]


@pytest.fixture
def failing_embeddings() -> FailingEmbeddings:
    """Embedding provider that raises on every batch."""
    return FailingEmbeddings()
