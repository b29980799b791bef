"""
Real-valued hypervectors.

Elements are drawn from a standard normal distribution and stored as float32.
Binding is the elementwise product; unbinding with the same key gives
``a * b**2``, which keeps a cosine similarity of about 1/sqrt(3) with ``a``.
Bundling keeps the raw sum and distance is the cosine distance.
"""

from typing import Optional

import torch

from hdc_emg.vectors.hypervector import Hypervector, Representation, cosine_distance


class RealHypervector(Hypervector):
    """Hypervector with float32 Gaussian elements."""

    representation = Representation.REAL
    dtype = torch.float32

    @classmethod
    def _sample(cls, dim: int, generator: Optional[torch.Generator]) -> torch.Tensor:
        return torch.randn(dim, generator=generator)

    @classmethod
    def _superpose(cls, total: torch.Tensor) -> torch.Tensor:
        return total

    def _distance(self, other: Hypervector) -> float:
        return cosine_distance(self._data, other._data)
