"""
Continuous Item Memory for HDC-EMG.

Quantized amplitudes are ordinal: level 3 is closer to level 4 than to level
9. A continuous item memory keeps that structure in vector space. Level 0 is
a random hypervector; every following level flips a further slice of
positions taken from one fixed random permutation:

    flips(l) = round(l * D / (2 * (L - 1)))

The flipped sets are nested, so the distance between two levels grows
linearly with their level difference and the two extreme levels differ in
D/2 positions, i.e. they are orthogonal.

This module also owns ``quantize``, which maps a raw amplitude to the level
index used for the lookup.
"""

import logging
from typing import Iterator, List, Optional, Type

import torch

from hdc_emg.errors import UnreachableStateError
from hdc_emg.memory.item import make_generator
from hdc_emg.vectors import BipolarHypervector, Hypervector

logger = logging.getLogger(__name__)

AMPLITUDE_MIN = 0.0
AMPLITUDE_MAX = 20.0


def quantize(
    amplitude: float,
    levels: int,
    min_value: float = AMPLITUDE_MIN,
    max_value: float = AMPLITUDE_MAX,
) -> int:
    """
    Map an amplitude to a level index in [0, levels).

    [min_value, max_value] is split into ``levels`` equal-width bins, each
    including its top edge; the last bin ends exactly at ``max_value``.
    Readings above ``max_value`` are clamped to it. Readings at or below
    ``min_value`` fall into bin 0.

    Args:
        amplitude: Raw channel reading
        levels: Number of quantization levels L
        min_value: Bottom of the nominal amplitude range (default: 0.0)
        max_value: Top of the nominal amplitude range (default: 20.0)

    Returns:
        Level index

    Raises:
        UnreachableStateError: If no bin contains the clamped value
    """
    if levels <= 0:
        raise ValueError(f"Invalid number of levels: {levels}")
    if not max_value > min_value:
        raise ValueError(f"Invalid amplitude range: [{min_value}, {max_value}]")

    # Sensor noise occasionally overshoots the nominal range
    if amplitude > max_value:
        amplitude = max_value

    step = (max_value - min_value) / levels
    for i in range(levels):
        top = max_value if i == levels - 1 else min_value + step * (i + 1)
        if amplitude <= top:
            return i

    raise UnreachableStateError(f"No amplitude bin for value {amplitude}")


class ContinuousItemMemory:
    """
    Ordered lookup table of correlated hypervectors.

    Adjacent levels are near-identical and the distance to level 0 grows
    monotonically with the level index.

    Args:
        num_levels: Number of levels L
        dim: Hypervector dimension D
        vector_type: Hypervector class to instantiate (default: bipolar)
        seed: Optional seed for reproducible generation
    """

    def __init__(
        self,
        num_levels: int,
        dim: int,
        vector_type: Type[Hypervector] = BipolarHypervector,
        seed: Optional[int] = None,
    ):
        if num_levels <= 0:
            raise ValueError(f"Invalid number of levels: {num_levels}")
        if dim <= 0:
            raise ValueError(f"Invalid dimension: {dim}")

        self.num_levels = num_levels
        self.dim = dim
        self.vector_type = vector_type

        generator = make_generator(seed)
        base = vector_type.random(dim, generator)
        order = torch.randperm(dim, generator=generator)

        self._vectors: List[Hypervector] = [base]
        for level in range(1, num_levels):
            flips = round(level * dim / (2 * (num_levels - 1)))
            self._vectors.append(base.negate(order[:flips]))

        logger.debug(
            "Continuous item memory: %d %s levels of dimension %d",
            num_levels, vector_type.representation.value, dim,
        )

    def lookup(self, level: int) -> Hypervector:
        """
        Return the vector for ``level``.

        Raises:
            IndexError: If ``level`` is outside [0, num_levels)
        """
        if not 0 <= level < self.num_levels:
            raise IndexError(
                f"Level {level} out of range for continuous item memory "
                f"with {self.num_levels} levels"
            )
        return self._vectors[level]

    def __getitem__(self, level: int) -> Hypervector:
        return self.lookup(level)

    def __len__(self) -> int:
        return self.num_levels

    def __iter__(self) -> Iterator[Hypervector]:
        return iter(self._vectors)
