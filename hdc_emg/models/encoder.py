"""
Spatial and temporal encoders for multi-channel EMG.

Spatial encoding turns one time instant into a hypervector. Each channel's
amplitude is quantized to a level, the channel's item vector is bound with
the level vector, and the per-channel results are bundled:

    S_t = bundle_c( IM[c] * CIM[q(x_{t,c})] )

Temporal encoding turns a window of N consecutive instants into an N-gram by
rotating each spatial vector by its offset inside the window and binding the
rotated vectors together:

    T_t = rho^0(S_t) * rho^1(S_{t+1}) * ... * rho^{N-1}(S_{t+N-1})

The encoding mode is an explicit value passed to every call, so an encoder
can be shared between spatial and temporal experiments.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import torch

from hdc_emg.errors import DimensionMismatchError
from hdc_emg.memory import ContinuousItemMemory, ItemMemory, quantize
from hdc_emg.memory.continuous import AMPLITUDE_MAX, AMPLITUDE_MIN
from hdc_emg.vectors import Hypervector, bundle

Dataset = Union[torch.Tensor, Sequence[Sequence[float]]]


@dataclass(frozen=True)
class Spatial:
    """Encode a single time instant."""

    @property
    def window_size(self) -> int:
        return 1


@dataclass(frozen=True)
class Temporal:
    """Encode ``window_size`` consecutive instants as an N-gram."""

    window_size: int

    def __post_init__(self):
        if self.window_size < 1:
            raise ValueError(f"Invalid N-gram size: {self.window_size}")


EncodingMode = Union[Spatial, Temporal]


def encoding_mode(ngram: int) -> EncodingMode:
    """Spatial mode for ``ngram == 1``, temporal N-grams otherwise."""
    if ngram == 1:
        return Spatial()
    return Temporal(ngram)


class Encoder:
    """
    Combines an item memory and a continuous item memory into query vectors.

    Both memories are only read. The item memory must hold at least one
    vector per channel of the encoded data.

    Args:
        item_memory: One vector per channel
        continuous_memory: One vector per quantization level
        amplitude_range: Nominal (min, max) amplitude used for quantization
            (default: (0.0, 20.0))
    """

    def __init__(
        self,
        item_memory: ItemMemory,
        continuous_memory: ContinuousItemMemory,
        amplitude_range: Tuple[float, float] = (AMPLITUDE_MIN, AMPLITUDE_MAX),
    ):
        if item_memory.vector_type is not continuous_memory.vector_type:
            raise DimensionMismatchError(
                "Item memory and continuous item memory use different representations: "
                f"{item_memory.vector_type.__name__} vs {continuous_memory.vector_type.__name__}"
            )
        if item_memory.dim != continuous_memory.dim:
            raise DimensionMismatchError(
                f"Dimension mismatch: item memory {item_memory.dim} "
                f"vs continuous item memory {continuous_memory.dim}"
            )
        min_value, max_value = amplitude_range
        if not max_value > min_value:
            raise ValueError(f"Invalid amplitude range: [{min_value}, {max_value}]")

        self.item_memory = item_memory
        self.continuous_memory = continuous_memory
        self.amplitude_range = (float(min_value), float(max_value))

    @property
    def levels(self) -> int:
        return self.continuous_memory.num_levels

    @property
    def dim(self) -> int:
        return self.item_memory.dim

    def quantize(self, amplitude: float) -> int:
        """Level index of ``amplitude`` under this encoder's range."""
        min_value, max_value = self.amplitude_range
        return quantize(amplitude, self.levels, min_value, max_value)

    def encode_instant(self, sample: Sequence[float]) -> Hypervector:
        """
        Spatial hypervector of one multi-channel sample.

        Args:
            sample: One amplitude per channel

        Returns:
            Bundle of the channel/level bindings
        """
        if isinstance(sample, torch.Tensor):
            sample = sample.tolist()
        if len(sample) == 0:
            raise ValueError("Cannot encode a sample without channels")

        bound = [
            self.item_memory[channel].bind(self.continuous_memory[self.quantize(amplitude)])
            for channel, amplitude in enumerate(sample)
        ]
        return bundle(bound)

    def encode(self, dataset: Dataset, start: int, mode: EncodingMode) -> Hypervector:
        """
        Query vector for the window of ``dataset`` beginning at ``start``.

        Args:
            dataset: Samples indexed by time
            start: Offset of the first sample of the window
            mode: Spatial or temporal encoding

        Returns:
            Spatial vector of ``dataset[start]`` or the N-gram starting there

        Raises:
            IndexError: If the window does not fit inside the dataset
        """
        n = mode.window_size
        if start < 0 or start + n > len(dataset):
            raise IndexError(
                f"Window [{start}, {start + n}) exceeds dataset of length {len(dataset)}"
            )

        if isinstance(mode, Spatial):
            return self.encode_instant(dataset[start])

        ngram = None
        for i in range(n):
            # permute returns a new vector; the spatial vector is left untouched
            rotated = self.encode_instant(dataset[start + i]).permute(i)
            ngram = rotated if ngram is None else ngram.bind(rotated)
        return ngram
