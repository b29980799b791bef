"""
Bipolar hypervectors.

Elements live in {-1, +1}. Binding is elementwise multiplication (the bipolar
form of XOR) and is exactly self-inverse. Bundling takes the elementwise
majority, resolving ties to +1, so prototypes stay bipolar no matter how many
vectors are superposed. Distance is the normalized Hamming distance.
"""

from typing import Optional

import torch

from hdc_emg.vectors.hypervector import Hypervector, Representation


class BipolarHypervector(Hypervector):
    """Hypervector with elements in {-1, +1}."""

    representation = Representation.BIPOLAR
    dtype = torch.int8

    @classmethod
    def _sample(cls, dim: int, generator: Optional[torch.Generator]) -> torch.Tensor:
        bits = torch.randint(0, 2, (dim,), generator=generator)
        return bits * 2 - 1

    @classmethod
    def _superpose(cls, total: torch.Tensor) -> torch.Tensor:
        # Majority vote, ties go to +1
        ones = torch.ones_like(total)
        return torch.where(total >= 0, ones, -ones)

    def _distance(self, other: Hypervector) -> float:
        mismatches = (self._data != other._data).sum().item()
        return mismatches / self.dim
