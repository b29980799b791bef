"""Shared fixtures for HDC-EMG tests."""

import struct

import pytest
import torch


def make_recording(labels, channels=4, seed=0):
    """
    Synthetic EMG recording with well separated classes.

    Odd labels draw every channel from [1, 9], even labels from [11, 19],
    so with two quantization levels each class encodes to one vector.
    """
    generator = torch.Generator().manual_seed(seed)
    labels = torch.tensor(labels, dtype=torch.int64)
    noise = torch.rand(len(labels), channels, generator=generator, dtype=torch.float64) * 8.0
    base = (labels % 2 == 0).to(torch.float64) * 10.0 + 1.0
    return base.unsqueeze(1) + noise, labels


@pytest.fixture
def recording():
    return make_recording


@pytest.fixture
def write_subject():
    """Write a subject's recording and labels in the binary dataset layout."""

    def write(directory, subject, dataset, labels):
        values = dataset.flatten().tolist()
        (directory / f"complete{subject}.bin").write_bytes(
            struct.pack(f"={len(values)}d", *values)
        )
        (directory / f"labels{subject}.bin").write_bytes(bytes(labels.tolist()))

    return write
