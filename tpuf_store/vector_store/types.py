"""Value types exchanged with the vector store.

``Document`` is the caller-facing record; ``QueryResult`` is a thin decoding
of one entry of the remote ``results`` array.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

Scalar = Union[str, int, float, bool, None]
AttributeValue = Union[Scalar, Sequence[Scalar]]

# Accepted wherever a single embedding is expected
Vector = Union[Sequence[float], np.ndarray]


class DistanceMetric(str, Enum):
    """Distance functions supported by the remote service."""
    COSINE = "cosine_distance"
    EUCLIDEAN = "euclidean_squared"


@dataclass(frozen=True)
class Document:
    """A piece of text plus metadata. ``metadata["source"]`` is expected.

    ``metadata`` is copied into a read-only view, so neither the document nor
    the caller's original dict can change it afterwards. Documents compare by
    value but are not hashable.
    """

    page_content: str
    metadata: Mapping[str, AttributeValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass
class QueryResult:
    """One hit returned by a vector query.

    The response shape is not validated: absent fields decode to ``None``
    (or an empty mapping for ``attributes``).
    """

    id: Optional[int]
    distance: Optional[float]
    vector: Optional[List[float]] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "QueryResult":
        return cls(
            id=payload.get("id"),
            distance=payload.get("dist"),
            vector=payload.get("vector"),
            attributes=payload.get("attributes") or {},
        )


def to_float_list(vector: Vector) -> List[float]:
    """Flatten a list/tuple/ndarray embedding into a JSON-friendly list."""
    return np.asarray(vector, dtype=np.float64).ravel().tolist()


__all__ = [
    "AttributeValue",
    "DistanceMetric",
    "Document",
    "QueryResult",
    "Vector",
    "to_float_list",
]
