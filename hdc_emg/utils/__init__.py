"""
Utilities for HDC-EMG.

This module provides the training loop, experiment configuration and the
binary dataset helpers used around the HDC engine.
"""

from hdc_emg.utils.training import (
    ExperimentConfig,
    PrototypeTrainer,
    SubjectResult,
    build_encoder,
    build_memories,
    run_subject,
    train_associative_memory,
)
from hdc_emg.utils.data import (
    downsample,
    load_subject,
    read_dataset,
    read_labels,
    split_training_data,
)

__all__ = [
    "ExperimentConfig",
    "PrototypeTrainer",
    "SubjectResult",
    "build_encoder",
    "build_memories",
    "run_subject",
    "train_associative_memory",
    "downsample",
    "load_subject",
    "read_dataset",
    "read_labels",
    "split_training_data",
]
