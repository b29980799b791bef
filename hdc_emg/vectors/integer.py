"""
Integer hypervectors.

Random vectors are drawn from {-1, +1} and stored as int32. Binding is the
elementwise product and bundling keeps the raw elementwise sum, so bundled
prototypes carry vote counts instead of a thresholded majority. Distance is
the cosine distance ``(1 - cos) / 2``.
"""

from typing import Optional

import torch

from hdc_emg.vectors.hypervector import Hypervector, Representation, cosine_distance


class IntegerHypervector(Hypervector):
    """Hypervector with int32 elements and unthresholded bundling."""

    representation = Representation.INTEGER
    dtype = torch.int32

    @classmethod
    def _sample(cls, dim: int, generator: Optional[torch.Generator]) -> torch.Tensor:
        bits = torch.randint(0, 2, (dim,), generator=generator)
        return bits * 2 - 1

    @classmethod
    def _superpose(cls, total: torch.Tensor) -> torch.Tensor:
        return total

    def _distance(self, other: Hypervector) -> float:
        return cosine_distance(self._data, other._data)
