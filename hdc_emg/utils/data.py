"""
Dataset handling for EMG recordings.

Each subject is stored as two headerless binary files:
- complete{N}.bin: records of ``channels`` float64 amplitudes (native byte order)
- labels{N}.bin: one unsigned byte per record

This module reads them into tensors and prepares the train/test material:
fixed-rate downsampling and a per-class prefix split for training.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import torch
from einops import rearrange

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_CHANNELS = 4
_DOUBLE_SIZE = 8


def read_dataset(path: PathLike, channels: int = DEFAULT_CHANNELS) -> torch.Tensor:
    """
    Read a binary EMG recording.

    Args:
        path: File of consecutive float64 records without header
        channels: Amplitudes per record (default: 4)

    Returns:
        Tensor of shape [samples, channels], dtype float64

    Raises:
        ValueError: If the file size is not a whole number of records
    """
    if channels <= 0:
        raise ValueError(f"Invalid channel count: {channels}")

    raw = Path(path).read_bytes()
    record_size = _DOUBLE_SIZE * channels
    if len(raw) % record_size != 0:
        raise ValueError(
            f"{path}: size {len(raw)} is not a multiple of the {record_size}-byte record"
        )
    if not raw:
        return torch.empty(0, channels, dtype=torch.float64)

    flat = torch.frombuffer(bytearray(raw), dtype=torch.float64)
    return rearrange(flat, '(t c) -> t c', c=channels)


def read_labels(path: PathLike) -> torch.Tensor:
    """Read one unsigned 8-bit label per byte as an int64 tensor."""
    raw = Path(path).read_bytes()
    if not raw:
        return torch.empty(0, dtype=torch.int64)
    return torch.frombuffer(bytearray(raw), dtype=torch.uint8).to(torch.int64)


def load_subject(
    dataset_dir: PathLike,
    subject: int,
    channels: int = DEFAULT_CHANNELS,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Load ``complete{subject}.bin`` and ``labels{subject}.bin`` from a directory.

    Raises:
        ValueError: If the recording and the labels differ in length
    """
    dataset_dir = Path(dataset_dir)
    dataset = read_dataset(dataset_dir / f"complete{subject}.bin", channels)
    labels = read_labels(dataset_dir / f"labels{subject}.bin")
    if len(dataset) != len(labels):
        raise ValueError(
            f"Subject {subject}: {len(dataset)} samples but {len(labels)} labels"
        )
    logger.info("Subject %d: %d samples", subject, len(dataset))
    return dataset, labels


def _as_tensors(dataset, labels) -> Tuple[torch.Tensor, torch.Tensor]:
    dataset = torch.as_tensor(dataset, dtype=torch.float64)
    labels = torch.as_tensor(labels, dtype=torch.int64)
    if len(dataset) != len(labels):
        raise ValueError(
            f"Dataset and labels differ in length: {len(dataset)} vs {len(labels)}"
        )
    return dataset, labels


def downsample(dataset, labels, rate: int) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Keep every ``rate``-th sample, starting with the first.

    Args:
        dataset: Samples of shape [samples, channels]
        labels: One label per sample
        rate: Downsampling stride (1 keeps everything)

    Returns:
        The downsampled dataset and labels
    """
    if rate < 1:
        raise ValueError(f"Invalid downsampling rate: {rate}")
    dataset, labels = _as_tensors(dataset, labels)
    return dataset[::rate], labels[::rate]


def split_training_data(
    dataset,
    labels,
    fraction: float,
    classes: Optional[Sequence[int]] = None,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Build a training set from the first samples of every class.

    For each class in increasing order, the first ``int(count * fraction)``
    samples carrying that label are taken. Class blocks are concatenated in
    label order, which is the sorted layout the trainer expects.

    Args:
        dataset: Samples of shape [samples, channels]
        labels: One label per sample
        fraction: Share of each class used for training, in (0, 1]
        classes: Labels to include (default: every label present)

    Returns:
        Training samples and their labels
    """
    if not 0.0 < fraction <= 1.0:
        raise ValueError(f"Invalid training fraction: {fraction}")
    dataset, labels = _as_tensors(dataset, labels)

    if classes is None:
        classes = torch.unique(labels).tolist()

    blocks = []
    for value in sorted(classes):
        positions = torch.nonzero(labels == value).flatten()
        take = int(len(positions) * fraction)
        blocks.append(positions[:take])
        logger.debug("Class %d: %d of %d samples for training", value, take, len(positions))

    if not blocks:
        index = torch.empty(0, dtype=torch.int64)
    else:
        index = torch.cat(blocks)
    return dataset[index], labels[index]
