"""
Hypervector abstraction for Hyperdimensional Computing.

A hypervector is a dense vector of fixed dimension D (typically thousands)
used as the atomic unit of representation. All representations share one
algebra:

- bind(a, b): elementwise product. The result is dissimilar to both inputs
  and binding again with b approximately recovers a.
- bundle([a, b, ...]): elementwise superposition, similar to every input.
- permute(a, k): cyclic rotation by k positions, used to encode order.
- distance(a, b): normalized dissimilarity in [0, 1], 0 for identical vectors.

Concrete representations (bipolar, integer, real) subclass ``Hypervector``
and only provide sampling, superposition and the distance kernel. The rest of
the pipeline is written once against this interface.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, Optional, Sequence

import torch
from einops import reduce

from hdc_emg.errors import DimensionMismatchError


class Representation(str, Enum):
    """Element representation of a hypervector."""

    BIPOLAR = "bipolar"
    INTEGER = "integer"
    REAL = "real"


class Hypervector(ABC):
    """
    Immutable hypervector of fixed dimension.

    Every operation returns a new vector; the wrapped tensor is never written
    after construction, and the constructor copies its input. Operations
    between vectors of different dimension or representation raise
    ``DimensionMismatchError``.

    Args:
        data: 1-D tensor holding the D elements
    """

    representation: Representation
    dtype: torch.dtype

    def __init__(self, data: torch.Tensor):
        if data.dim() != 1:
            raise ValueError(f"Hypervector data must be 1-D, got shape {tuple(data.shape)}")
        if data.numel() == 0:
            raise ValueError("Hypervector dimension must be positive")
        self._data = data.to(self.dtype, copy=True)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def random(
        cls,
        dim: int,
        generator: Optional[torch.Generator] = None,
    ) -> "Hypervector":
        """
        Sample a pseudo-random hypervector.

        Args:
            dim: Dimension D
            generator: Optional seeded generator for reproducibility

        Returns:
            A new random hypervector
        """
        if dim <= 0:
            raise ValueError(f"Invalid dimension: {dim}")
        return cls(cls._sample(dim, generator))

    @classmethod
    @abstractmethod
    def _sample(cls, dim: int, generator: Optional[torch.Generator]) -> torch.Tensor:
        """Draw the elements of a random vector."""

    @classmethod
    @abstractmethod
    def _superpose(cls, total: torch.Tensor) -> torch.Tensor:
        """Map an elementwise sum back into the representation."""

    @abstractmethod
    def _distance(self, other: "Hypervector") -> float:
        """Distance kernel between two compatible, non-identical vectors."""

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def data(self) -> torch.Tensor:
        """Underlying tensor. Treat as read-only."""
        return self._data

    @property
    def dim(self) -> int:
        return self._data.shape[0]

    def __len__(self) -> int:
        return self.dim

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hypervector):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.dim == other.dim
            and torch.equal(self._data, other._data)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dim={self.dim})"

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def check_compatible(self, other: "Hypervector"):
        """Fail fast unless ``other`` has the same representation and dimension."""
        if type(self) is not type(other):
            raise DimensionMismatchError(
                f"Representation mismatch: {type(self).__name__} vs {type(other).__name__}"
            )
        if self.dim != other.dim:
            raise DimensionMismatchError(
                f"Dimension mismatch: {self.dim} vs {other.dim}"
            )

    def bind(self, other: "Hypervector") -> "Hypervector":
        """Elementwise product of two vectors."""
        self.check_compatible(other)
        return type(self)(self._data * other._data)

    @classmethod
    def bundle(cls, vectors: Iterable["Hypervector"]) -> "Hypervector":
        """
        Superpose a non-empty sequence of vectors.

        Args:
            vectors: Vectors of this representation and a common dimension

        Returns:
            The superposition, mapped back into the representation

        Raises:
            ValueError: If ``vectors`` is empty
        """
        vectors = list(vectors)
        if not vectors:
            raise ValueError("Cannot bundle an empty sequence of hypervectors")

        first = vectors[0]
        if not isinstance(first, cls):
            raise DimensionMismatchError(
                f"Cannot bundle {type(first).__name__} as {cls.__name__}"
            )
        for v in vectors[1:]:
            first.check_compatible(v)

        stacked = torch.stack([v._data for v in vectors])
        if not stacked.is_floating_point():
            stacked = stacked.to(torch.int64)
        total = reduce(stacked, 'n d -> d', 'sum')
        return cls(cls._superpose(total))

    def permute(self, shifts: int) -> "Hypervector":
        """Cyclic rotation by ``shifts`` positions. Zero shifts yields an equal copy."""
        return type(self)(torch.roll(self._data, shifts=int(shifts), dims=0))

    def negate(self, indices: torch.Tensor) -> "Hypervector":
        """Copy with the elements at ``indices`` sign-flipped."""
        data = self._data.clone()
        data[indices] = -data[indices]
        return type(self)(data)

    def distance(self, other: "Hypervector") -> float:
        """
        Normalized dissimilarity in [0, 1].

        Identical vectors are at distance exactly 0.
        """
        self.check_compatible(other)
        if torch.equal(self._data, other._data):
            return 0.0
        return min(max(self._distance(other), 0.0), 1.0)


class BundleAccumulator:
    """
    Running-sum form of ``bundle`` for long sequences.

    Adding vectors one at a time keeps memory at a single D-element sum
    instead of stacking every input. ``result()`` equals ``bundle`` over the
    same vectors.

    Args:
        vector_type: Representation of the accumulated vectors
    """

    def __init__(self, vector_type: type):
        self.vector_type = vector_type
        self.count = 0
        self._first: Optional[Hypervector] = None
        self._total: Optional[torch.Tensor] = None

    def add(self, vector: Hypervector):
        if not isinstance(vector, self.vector_type):
            raise DimensionMismatchError(
                f"Cannot accumulate {type(vector).__name__} as {self.vector_type.__name__}"
            )
        if self._first is None:
            self._first = vector
            data = vector.data
            self._total = data.clone() if data.is_floating_point() else data.to(torch.int64)
        else:
            self._first.check_compatible(vector)
            self._total += vector.data.to(self._total.dtype)
        self.count += 1

    def result(self) -> Hypervector:
        """
        Superposition of everything added so far.

        Raises:
            ValueError: If nothing was added
        """
        if self._total is None:
            raise ValueError("Cannot bundle an empty sequence of hypervectors")
        return self.vector_type(self.vector_type._superpose(self._total))

    def reset(self):
        self.count = 0
        self._first = None
        self._total = None


def cosine_distance(a: torch.Tensor, b: torch.Tensor) -> float:
    """``(1 - cos) / 2`` computed in float64; zero-norm operands count as orthogonal."""
    a = a.to(torch.float64)
    b = b.to(torch.float64)
    norms = torch.linalg.vector_norm(a) * torch.linalg.vector_norm(b)
    if norms.item() == 0.0:
        return 0.5
    cos = torch.dot(a, b) / norms
    return (1.0 - cos.item()) / 2.0


# ----------------------------------------------------------------------
# Functional aliases
# ----------------------------------------------------------------------

def bind(a: Hypervector, b: Hypervector) -> Hypervector:
    """Bind two hypervectors."""
    return a.bind(b)


def bundle(vectors: Sequence[Hypervector]) -> Hypervector:
    """Bundle a non-empty sequence of hypervectors of one representation."""
    vectors = list(vectors)
    if not vectors:
        raise ValueError("Cannot bundle an empty sequence of hypervectors")
    return type(vectors[0]).bundle(vectors)


def permute(v: Hypervector, shifts: int) -> Hypervector:
    """Rotate a hypervector by ``shifts`` positions."""
    return v.permute(shifts)


def distance(a: Hypervector, b: Hypervector) -> float:
    """Normalized distance between two hypervectors."""
    return a.distance(b)
