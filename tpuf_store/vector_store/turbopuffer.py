"""turbopuffer implementation of vector store.

All indexing, storage and nearest-neighbour search happen on the remote
service. This adapter only shapes JSON requests, maps responses back into
``Document`` objects and rejects inconsistent batches before they leave the
process.

Request handling
- Every operation is a single ``POST``; there is no retry, batching or pooling
- Calls go through ``_post`` so transport and status failures are logged and
  wrapped in ``RemoteServiceError`` uniformly
- When no ``httpx.AsyncClient`` is injected, each call opens a short-lived
  client with no timeout; callers impose their own via ``asyncio.wait_for``

Ids
- Without explicit ``ids``, records get their 0-based position in the batch.
  Two uploads without ids therefore overwrite each other's records at the
  overlapping positions, and concurrent uploads race on them remotely.
"""

import operator
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx
import structlog
from pydantic import SecretStr

from ..common.config import DEFAULT_NAMESPACE, TurbopufferConfig
from ..common.logging import log_performance
from .base import (
    Embeddings,
    MissingCredentialError,
    RemoteServiceError,
    ResponseDecodeError,
    ValidationError,
    VectorStore,
)
from .types import (
    AttributeValue,
    DistanceMetric,
    Document,
    QueryResult,
    Vector,
    to_float_list,
)

logger = structlog.get_logger("vector_store.turbopuffer")

SEARCH_ATTRIBUTES = ["source", "pageContent"]


def _coerce_ids(ids: Sequence[int]) -> List[int]:
    """Turn ids into plain ints, rejecting anything that is not integral.

    ``operator.index`` accepts Python and numpy integers but refuses floats,
    so two distinct ids never collapse into the same remote id.
    """
    try:
        return [operator.index(i) for i in ids]
    except TypeError as e:
        raise ValidationError(f"Ids must be integers: {e}") from e


class TurbopufferVectorStore(VectorStore):
    """turbopuffer-backed vector store bound to one namespace."""

    def __init__(
        self,
        embeddings: Embeddings,
        api_key: Optional[str] = None,
        namespace: Optional[str] = None,
        *,
        settings: Optional[TurbopufferConfig] = None,
        api_endpoint: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Configure a turbopuffer-backed vector store.

        Parameters
        - embeddings: Provider used by ``add_documents`` and text searches
        - api_key: Bearer token; falls back to ``settings.turbopuffer_api_key``
        - namespace: Remote partition for every call (default ``"default"``)
        - settings: Explicit configuration; read from the environment when
          omitted and something still needs resolving
        - api_endpoint: Base URL override, e.g. for a regional deployment
        - client: Pre-built ``httpx.AsyncClient`` to send requests through

        Raises ``MissingCredentialError`` when no API key can be resolved.
        No network call is made here.
        """
        super().__init__(embeddings)

        if settings is None and (api_key is None or api_endpoint is None):
            settings = TurbopufferConfig()

        resolved_key = api_key if api_key is not None else settings.api_key_value()
        if not resolved_key:
            raise MissingCredentialError("TurboPuffer api key is not provided.")

        self._api_key = SecretStr(resolved_key)
        self.namespace = namespace if namespace is not None else DEFAULT_NAMESPACE
        self.api_endpoint = (api_endpoint or settings.turbopuffer_api_endpoint).rstrip("/")
        self._client = client

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(namespace={self.namespace!r}, "
            f"api_endpoint={self.api_endpoint!r})"
        )

    def vectorstore_type(self) -> str:
        return "turbopuffer"

    @property
    def vectors_url(self) -> str:
        return f"{self.api_endpoint}/vectors/{self.namespace}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    async def _post(
        self,
        operation: str,
        url: str,
        payload: Dict[str, Any],
    ) -> httpx.Response:
        """POST ``payload`` as JSON and return the successful response.

        Any ``httpx`` failure, including a non-2xx status, is logged and
        re-raised as ``RemoteServiceError``.
        """
        start = time.perf_counter()
        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=self._headers())
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    response = await client.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                f"Failed to {operation} vectors",
                namespace=self.namespace,
                status_code=status_code,
                error=str(e)
            )
            raise RemoteServiceError(
                f"turbopuffer {operation} failed with status {status_code}: {e.response.text}",
                operation=operation,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to {operation} vectors",
                namespace=self.namespace,
                status_code=None,
                error=str(e)
            )
            raise RemoteServiceError(
                f"turbopuffer {operation} failed: {e}",
                operation=operation,
            ) from e

        log_performance(
            f"turbopuffer.{operation}",
            (time.perf_counter() - start) * 1000,
            namespace=self.namespace,
            status_code=response.status_code
        )
        return response

    @staticmethod
    def _build_attributes(documents: Sequence[Document]) -> Dict[str, List[AttributeValue]]:
        """Project documents into parallel attribute arrays.

        ``source`` and ``pageContent`` are always present. Any other metadata
        key found in the batch gets its own column, ``None`` where missing.
        """
        attributes: Dict[str, List[AttributeValue]] = {
            "source": [doc.metadata.get("source") for doc in documents],
            "pageContent": [doc.page_content for doc in documents],
        }
        for doc in documents:
            for key in doc.metadata:
                if key in attributes:
                    continue
                attributes[key] = [other.metadata.get(key) for other in documents]
        return attributes

    async def add_vectors(
        self,
        vectors: Sequence[Vector],
        documents: Sequence[Document],
        ids: Optional[Sequence[int]] = None,
    ) -> List[int]:
        """Upload precomputed vectors paired with documents.

        Raises ``ValidationError`` before any request when ``ids`` or
        ``documents`` do not line up with ``vectors``, when the batch is
        empty, or when an id is not an integer.
        """
        if ids is not None and len(ids) != len(vectors):
            raise ValidationError("Number of ids provided does not match number of vectors")

        if len(documents) != len(vectors):
            raise ValidationError("Number of documents provided does not match number of vectors")

        if len(documents) == 0:
            raise ValidationError("No documents provided")

        doc_ids = _coerce_ids(ids) if ids is not None else list(range(len(documents)))

        payload = {
            "docIds": doc_ids,
            "vectors": [to_float_list(vector) for vector in vectors],
            "attributes": self._build_attributes(documents),
        }

        await self._post("store", self.vectors_url, payload)

        logger.info("Stored vectors", namespace=self.namespace, count=len(doc_ids))
        return doc_ids

    async def query_vectors(
        self,
        query: Vector,
        k: int,
        distance_metric: Union[DistanceMetric, str],
        include_attributes: Optional[Sequence[str]] = None,
        include_vector: Optional[bool] = None,
        filters: Optional[Any] = None,
    ) -> List[QueryResult]:
        """Run a raw nearest-neighbour query.

        ``filters`` is forwarded verbatim; its format is defined by the remote
        service (see https://turbopuffer.com/docs/reference/query). Unset
        options are left out of the request body.
        """
        if isinstance(distance_metric, DistanceMetric):
            distance_metric = distance_metric.value

        payload = {
            "query": to_float_list(query),
            "k": k,
            "distanceMetric": distance_metric,
            "filters": filters,
            "includeAttributes": list(include_attributes) if include_attributes is not None else None,
            "includeVector": include_vector,
        }
        payload = {key: value for key, value in payload.items() if value is not None}

        response = await self._post("query", f"{self.vectors_url}/query", payload)

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Failed to decode query response", namespace=self.namespace, error=str(e))
            raise ResponseDecodeError(f"turbopuffer query returned invalid JSON: {e}") from e

        results = [QueryResult.from_dict(item) for item in body.get("results") or []]
        logger.info(
            "Queried vectors",
            namespace=self.namespace,
            k=k,
            results_count=len(results)
        )
        return results

    async def similarity_search_vector_with_score(
        self,
        query: Vector,
        k: int,
        filter: Optional[Any] = None,
    ) -> List[Tuple[Document, float]]:
        """Cosine search returning ``(Document, distance)`` pairs in result order.

        Only ``source`` and ``pageContent`` are requested, so any other
        attribute stored with a record is not reflected in the documents.
        """
        results = await self.query_vectors(
            query,
            k,
            DistanceMetric.COSINE,
            include_attributes=SEARCH_ATTRIBUTES,
            include_vector=False,
            filters=filter,
        )

        return [
            (
                Document(
                    page_content=result.attributes.get("pageContent"),
                    metadata={"source": result.attributes.get("source")},
                ),
                result.distance,
            )
            for result in results
        ]

    @classmethod
    async def from_documents(
        cls,
        documents: Sequence[Document],
        embeddings: Embeddings,
        api_key: Optional[str] = None,
        namespace: Optional[str] = None,
        **kwargs: Any
    ) -> "TurbopufferVectorStore":
        """Build a store and upload ``documents`` into it.

        If the upload fails the error propagates and no store is returned.
        """
        store = cls(embeddings, api_key=api_key, namespace=namespace, **kwargs)
        await store.add_documents(documents)
        return store

    @classmethod
    async def from_texts(
        cls,
        texts: Sequence[str],
        metadatas: Union[Mapping[str, AttributeValue], Sequence[Mapping[str, AttributeValue]], None],
        embeddings: Embeddings,
        api_key: Optional[str] = None,
        namespace: Optional[str] = None,
        **kwargs: Any
    ) -> "TurbopufferVectorStore":
        """Wrap raw texts into documents and delegate to ``from_documents``.

        ``metadatas`` is either one mapping shared by every text or one
        mapping per text.
        """
        if metadatas is None or isinstance(metadatas, Mapping):
            metadatas = [metadatas or {}] * len(texts)
        elif len(metadatas) != len(texts):
            raise ValidationError("Number of metadatas provided does not match number of texts")

        documents = [
            Document(page_content=text, metadata=dict(metadata))
            for text, metadata in zip(texts, metadatas)
        ]
        return await cls.from_documents(
            documents, embeddings, api_key=api_key, namespace=namespace, **kwargs
        )
