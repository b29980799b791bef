"""
Item Memory for HDC-EMG.

An item memory assigns one fixed pseudo-random hypervector to every symbol of
a finite, unordered alphabet (here, the EMG channel index). In high dimension
independently sampled vectors are nearly orthogonal, so distinct symbols do
not interfere once bound and bundled together.
"""

import logging
from typing import Iterator, List, Optional, Type

import torch

from hdc_emg.vectors import BipolarHypervector, Hypervector

logger = logging.getLogger(__name__)


def make_generator(seed: Optional[int]) -> Optional[torch.Generator]:
    """Seeded generator, or None to draw from torch's global RNG."""
    if seed is None:
        return None
    return torch.Generator().manual_seed(seed)


class ItemMemory:
    """
    Fixed lookup table of independent random hypervectors.

    The vectors are generated once at construction and never regenerated.
    Two memories built with the same seed hold identical vectors.

    Args:
        num_items: Number of symbols K
        dim: Hypervector dimension D
        vector_type: Hypervector class to instantiate (default: bipolar)
        seed: Optional seed for reproducible generation
    """

    def __init__(
        self,
        num_items: int,
        dim: int,
        vector_type: Type[Hypervector] = BipolarHypervector,
        seed: Optional[int] = None,
    ):
        if num_items <= 0:
            raise ValueError(f"Invalid number of items: {num_items}")
        if dim <= 0:
            raise ValueError(f"Invalid dimension: {dim}")

        self.num_items = num_items
        self.dim = dim
        self.vector_type = vector_type

        generator = make_generator(seed)
        self._vectors: List[Hypervector] = [
            vector_type.random(dim, generator) for _ in range(num_items)
        ]
        logger.debug(
            "Item memory: %d %s vectors of dimension %d",
            num_items, vector_type.representation.value, dim,
        )

    def lookup(self, symbol: int) -> Hypervector:
        """
        Return the vector for ``symbol``.

        Raises:
            IndexError: If ``symbol`` is outside [0, num_items)
        """
        if not 0 <= symbol < self.num_items:
            raise IndexError(
                f"Symbol {symbol} out of range for item memory of size {self.num_items}"
            )
        return self._vectors[symbol]

    def __getitem__(self, symbol: int) -> Hypervector:
        return self.lookup(symbol)

    def __len__(self) -> int:
        return self.num_items

    def __iter__(self) -> Iterator[Hypervector]:
        return iter(self._vectors)
