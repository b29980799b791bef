"""
Prediction and accuracy over encoded EMG recordings.

Three procedures are provided:

1. predict_point: classify every window start independently and score it
   against the label at that position.
2. predict_window_max: classify a range of positions jointly by the single
   closest (position, prototype) pair.
3. evaluate_by_run: split the recording into runs of constant label and
   classify each run with predict_window_max.

Associative memory indices are turned into labels by adding a label offset,
the lowest label seen in training.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

import torch

from hdc_emg.errors import UnreachableStateError
from hdc_emg.memory import AssociativeMemory
from hdc_emg.models.encoder import Dataset, Encoder, EncodingMode

logger = logging.getLogger(__name__)

Labels = Union[torch.Tensor, Sequence[int]]


def as_label_list(labels: Labels) -> List[int]:
    """Plain Python list view of a label sequence."""
    if isinstance(labels, torch.Tensor):
        return labels.tolist()
    return list(labels)


def _check_aligned(dataset: Dataset, labels: List[int]):
    if len(dataset) != len(labels):
        raise ValueError(
            f"Dataset and labels differ in length: {len(dataset)} vs {len(labels)}"
        )
    if not labels:
        raise ValueError("Cannot evaluate an empty dataset")


def predict_label(
    dataset: Dataset,
    start: int,
    encoder: Encoder,
    memory: AssociativeMemory,
    mode: EncodingMode,
    label_offset: int = 0,
) -> int:
    """Predicted label of the window beginning at ``start``."""
    query = encoder.encode(dataset, start, mode)
    return memory.search(query) + label_offset


def predict_point(
    dataset: Dataset,
    labels: Labels,
    encoder: Encoder,
    memory: AssociativeMemory,
    mode: EncodingMode,
    label_offset: Optional[int] = None,
) -> float:
    """
    Point-wise prediction accuracy in percent.

    Every window start that keeps the whole window inside the dataset is
    encoded, classified and compared with the label at the window start.
    The accuracy is divided by the full dataset length, not by the number of
    windows, so the last N-1 positions always count as misses.

    Args:
        dataset: Samples indexed by time
        labels: One label per sample
        encoder: Encoder shared with training
        memory: Trained associative memory
        mode: Encoding mode used in training
        label_offset: Label of prototype 0 (default: minimum of ``labels``)

    Returns:
        Accuracy in percent
    """
    labels = as_label_list(labels)
    _check_aligned(dataset, labels)
    offset = min(labels) if label_offset is None else label_offset

    correct = 0
    for i in range(len(dataset) - mode.window_size + 1):
        if predict_label(dataset, i, encoder, memory, mode, offset) == labels[i]:
            correct += 1

    return correct / len(dataset) * 100.0


def predict_window_max(
    dataset: Dataset,
    start: int,
    stop: int,
    encoder: Encoder,
    memory: AssociativeMemory,
    mode: EncodingMode,
) -> int:
    """
    Prototype index of the global minimum distance over a range of windows.

    Every position in [start, stop) is encoded and compared with every
    prototype. The result is the prototype of the closest pair over the whole
    position x prototype grid, not a per-position vote. Ties keep the first
    pair found (lowest position, then lowest index).

    Raises:
        ValueError: If the range is empty or the memory holds no prototypes
    """
    if stop <= start:
        raise ValueError(f"Empty window range [{start}, {stop})")
    if len(memory) == 0:
        raise ValueError("Cannot search an empty associative memory")

    best_index = 0
    best_distance = float('inf')
    for position in range(start, stop):
        query = encoder.encode(dataset, position, mode)
        for index, dist in enumerate(memory.distances(query)):
            if dist < best_distance:
                best_distance = dist
                best_index = index
    return best_index


def run_boundaries(labels: Labels) -> List[Tuple[int, int]]:
    """
    Maximal runs of equal adjacent labels as half-open ``(start, stop)`` pairs.

    Raises:
        UnreachableStateError: If two adjacent labels are neither equal nor unequal
    """
    labels = as_label_list(labels)
    runs: List[Tuple[int, int]] = []
    if not labels:
        return runs

    start = 0
    for i in range(len(labels) - 1):
        if labels[i] == labels[i + 1]:
            continue
        elif labels[i] != labels[i + 1]:
            runs.append((start, i + 1))
            start = i + 1
        else:
            raise UnreachableStateError(
                f"Labels at {i} and {i + 1} are neither equal nor unequal"
            )
    runs.append((start, len(labels)))
    return runs


def evaluate_by_run(
    dataset: Dataset,
    labels: Labels,
    encoder: Encoder,
    memory: AssociativeMemory,
    mode: EncodingMode,
    label_offset: Optional[int] = None,
) -> float:
    """
    Run-sliced accuracy in percent.

    The label sequence is cut into maximal runs of one label. Each run's
    window starts at the run start and spans at least N samples (the run
    length when longer). Every position of that window is the start of an
    N-gram, so the last N-1 of them reach into the following run. The
    positions are classified jointly with ``predict_window_max`` and the
    result is compared with the run's label. Positions whose N-gram would
    pass the end of the dataset are dropped, and a run left with no position
    is skipped.

    Args:
        dataset: Samples indexed by time
        labels: One label per sample
        encoder: Encoder shared with training
        memory: Trained associative memory
        mode: Encoding mode used in training
        label_offset: Label of prototype 0 (default: minimum of ``labels``)

    Returns:
        Correct runs over evaluated runs, in percent
    """
    labels = as_label_list(labels)
    _check_aligned(dataset, labels)
    offset = min(labels) if label_offset is None else label_offset
    n = mode.window_size

    predictions = 0
    correct = 0
    last_stop = len(dataset) - n + 1
    for start, stop in run_boundaries(labels):
        window = max(stop - start, n)
        # N-grams may straddle into the next run; none may pass the dataset end
        positions_stop = min(start + window, last_stop)
        if positions_stop <= start:
            logger.debug("Skipping run [%d, %d): shorter than the N-gram at dataset end", start, stop)
            continue

        index = predict_window_max(
            dataset, start, positions_stop, encoder, memory, mode,
        )
        predictions += 1
        if index + offset == labels[start]:
            correct += 1

    if predictions == 0:
        raise ValueError(f"No label run can hold a window of {n} samples")

    logger.debug("Run-sliced evaluation: %d/%d runs correct", correct, predictions)
    return correct / predictions * 100.0
