"""
Training and experiment utilities for HDC-EMG.

Training in HDC is a single pass: every valid window of a class is encoded
and the encodings are bundled into the class prototype. This module provides

1. PrototypeTrainer: builds an associative memory from sorted training data
2. ExperimentConfig: the parameters of one encoding experiment
3. run_subject: downsample, split, train and evaluate one subject
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Type

import torch

from hdc_emg.memory import AssociativeMemory, ContinuousItemMemory, ItemMemory
from hdc_emg.memory.continuous import AMPLITUDE_MAX, AMPLITUDE_MIN
from hdc_emg.models.classifier import (
    Labels,
    as_label_list,
    evaluate_by_run,
    predict_point,
)
from hdc_emg.models.encoder import Dataset, Encoder, EncodingMode, Spatial, encoding_mode
from hdc_emg.utils.data import DEFAULT_CHANNELS, downsample, split_training_data
from hdc_emg.vectors import BundleAccumulator, Hypervector, get_vector_type

logger = logging.getLogger(__name__)


class PrototypeTrainer:
    """
    Bundles the encoded windows of each class into one prototype.

    Labels must arrive sorted, one contiguous block per class, with the
    lowest label first. A window is used only when its first and last sample
    carry the same label, so windows straddling a class boundary are
    excluded. The prototype of a class is appended when the label changes
    and after the scan for the last class.

    After ``train`` the trainer exposes:
        label_offset: label of prototype 0 (the lowest training label)
        exemplar_counts: number of windows bundled per label

    Args:
        encoder: Encoder shared with the classifier
    """

    def __init__(self, encoder: Encoder):
        self.encoder = encoder
        self.label_offset: Optional[int] = None
        self.exemplar_counts: Dict[int, int] = {}

    def train(
        self,
        dataset: Dataset,
        labels: Labels,
        mode: EncodingMode,
    ) -> AssociativeMemory:
        """
        Build the associative memory.

        Args:
            dataset: Training samples, sorted by class
            labels: One label per sample
            mode: Spatial or temporal encoding

        Returns:
            Associative memory with one prototype per class, in label order

        Raises:
            ValueError: If dataset and labels are misaligned, the data is
                shorter than one window, or a class has no valid window
        """
        labels = as_label_list(labels)
        if len(dataset) != len(labels):
            raise ValueError(
                f"Dataset and labels differ in length: {len(dataset)} vs {len(labels)}"
            )
        n = mode.window_size
        if len(labels) < n:
            raise ValueError(f"Training data of length {len(labels)} is shorter than one window ({n})")

        memory = AssociativeMemory()
        accumulator = BundleAccumulator(self.encoder.item_memory.vector_type)
        self.exemplar_counts = {}
        self.label_offset = min(labels)

        label = labels[0]
        for i in range(len(labels) - n + 1):
            if labels[i] != label:
                self._finalize(memory, accumulator, label)
                label = labels[i]

            if labels[i] == labels[i + n - 1]:
                accumulator.add(self.encoder.encode(dataset, i, mode))

        self._finalize(memory, accumulator, label)
        return memory

    def _finalize(self, memory: AssociativeMemory, accumulator: BundleAccumulator, label: int):
        if accumulator.count == 0:
            raise ValueError(f"Label {label} has no training window inside a single-label run")
        memory.append(accumulator.result())
        self.exemplar_counts[label] = accumulator.count
        logger.debug("Prototype %d: label %d from %d windows", len(memory) - 1, label, accumulator.count)
        accumulator.reset()


def train_associative_memory(
    dataset: Dataset,
    labels: Labels,
    encoder: Encoder,
    mode: EncodingMode,
) -> AssociativeMemory:
    """Train an associative memory in one call."""
    return PrototypeTrainer(encoder).train(dataset, labels, mode)


@dataclass
class ExperimentConfig:
    """Configuration of one encoding experiment."""

    dim: int = 10000  # Hypervector dimension D
    levels: int = 10  # Quantization levels L
    representation: str = "bipolar"  # bipolar / integer / real
    ngram: int = 1  # 1 for spatial, N for temporal N-grams
    training_fraction: float = 0.25  # Share of each class used for training
    downsample: int = 1  # Keep every n-th sample
    amplitude_range: Tuple[float, float] = (AMPLITUDE_MIN, AMPLITUDE_MAX)
    seed: Optional[int] = None
    channels: int = DEFAULT_CHANNELS
    evaluation: str = "auto"  # auto / point / run
    downsample_overrides: Dict[int, int] = field(default_factory=dict)  # subject -> rate

    def __post_init__(self):
        if self.dim <= 0:
            raise ValueError(f"Invalid dimension: {self.dim}")
        if self.levels <= 0:
            raise ValueError(f"Invalid number of levels: {self.levels}")
        if self.ngram <= 0:
            raise ValueError(f"Invalid N-gram size: {self.ngram}")
        if not 0.0 < self.training_fraction <= 1.0:
            raise ValueError(f"Invalid training fraction: {self.training_fraction}")
        if self.downsample <= 0:
            raise ValueError(f"Invalid downsampling rate: {self.downsample}")
        if any(rate <= 0 for rate in self.downsample_overrides.values()):
            raise ValueError(f"Invalid downsampling override: {self.downsample_overrides}")
        if self.channels <= 0:
            raise ValueError(f"Invalid channel count: {self.channels}")
        if not self.amplitude_range[1] > self.amplitude_range[0]:
            raise ValueError(f"Invalid amplitude range: {self.amplitude_range}")
        if self.evaluation not in ("auto", "point", "run"):
            raise ValueError(f"Invalid evaluation: {self.evaluation}")
        # Fails on unknown names
        get_vector_type(self.representation)

    @property
    def vector_type(self) -> Type[Hypervector]:
        return get_vector_type(self.representation)

    @property
    def mode(self) -> EncodingMode:
        return encoding_mode(self.ngram)

    @property
    def uses_point_prediction(self) -> bool:
        if self.evaluation == "auto":
            return isinstance(self.mode, Spatial)
        return self.evaluation == "point"

    def downsample_for(self, subject: Optional[int]) -> int:
        return self.downsample_overrides.get(subject, self.downsample)

    def describe(self) -> str:
        encode = "SPATIAL" if isinstance(self.mode, Spatial) else "TEMPORAL"
        return (
            f"D: {self.dim} Levels: {self.levels} Encode type: {encode} "
            f"N-grams: {self.ngram} Training Fraction: {self.training_fraction * 100.0}% "
            f"Downsample: {self.downsample}"
        )


@dataclass
class SubjectResult:
    """Outcome of one subject's experiment."""

    subject: Optional[int]
    accuracy: float
    num_train: int
    num_test: int
    num_prototypes: int
    exemplar_counts: Dict[int, int]


def build_memories(config: ExperimentConfig) -> Tuple[ItemMemory, ContinuousItemMemory]:
    """
    Item memory (one vector per channel) and continuous item memory for a config.

    With a seed, the continuous item memory uses ``seed + 1`` so the two
    memories are drawn from different streams.
    """
    vector_type = config.vector_type
    cim_seed = None if config.seed is None else config.seed + 1
    item_memory = ItemMemory(config.channels, config.dim, vector_type, seed=config.seed)
    continuous_memory = ContinuousItemMemory(config.levels, config.dim, vector_type, seed=cim_seed)
    return item_memory, continuous_memory


def build_encoder(config: ExperimentConfig) -> Encoder:
    item_memory, continuous_memory = build_memories(config)
    return Encoder(item_memory, continuous_memory, config.amplitude_range)


def run_subject(
    dataset: torch.Tensor,
    labels: torch.Tensor,
    config: ExperimentConfig,
    encoder: Encoder,
    subject: Optional[int] = None,
) -> SubjectResult:
    """
    Run one experiment on one subject's recording.

    The recording is downsampled into the test set; the training set is the
    leading ``training_fraction`` of every class of the test set. Spatial
    experiments are scored with point-wise prediction, temporal ones with
    run-sliced prediction, unless ``config.evaluation`` says otherwise.

    Args:
        dataset: Full recording, shape [samples, channels]
        labels: One label per sample
        config: Experiment parameters
        encoder: Encoder built for ``config`` (shared across subjects)
        subject: Subject number, used for downsampling overrides and reporting

    Returns:
        SubjectResult with the accuracy in percent
    """
    test_data, test_labels = downsample(dataset, labels, config.downsample_for(subject))
    train_data, train_labels = split_training_data(
        test_data, test_labels, config.training_fraction,
    )

    mode = config.mode
    trainer = PrototypeTrainer(encoder)
    memory = trainer.train(train_data, train_labels, mode)

    if config.uses_point_prediction:
        accuracy = predict_point(
            test_data, test_labels, encoder, memory, mode, trainer.label_offset,
        )
    else:
        accuracy = evaluate_by_run(
            test_data, test_labels, encoder, memory, mode, trainer.label_offset,
        )

    logger.info("Subject %s: accuracy %.2f%%", subject, accuracy)
    return SubjectResult(
        subject=subject,
        accuracy=accuracy,
        num_train=len(train_data),
        num_test=len(test_data),
        num_prototypes=len(memory),
        exemplar_counts=dict(trainer.exemplar_counts),
    )
