"""Tests for HDC-EMG training and experiment utilities."""

import pytest
import torch

from hdc_emg.memory import ContinuousItemMemory, ItemMemory
from hdc_emg.models import Encoder, Spatial, Temporal, evaluate_by_run, predict_point
from hdc_emg.utils.training import (
    ExperimentConfig,
    PrototypeTrainer,
    build_encoder,
    run_subject,
    train_associative_memory,
)
from hdc_emg.vectors import BipolarHypervector, IntegerHypervector, RealHypervector, bundle


def make_encoder(channels=2, levels=2, dim=4000, vector_type=BipolarHypervector):
    item_memory = ItemMemory(channels, dim, vector_type=vector_type, seed=0)
    continuous_memory = ContinuousItemMemory(levels, dim, vector_type=vector_type, seed=1)
    return Encoder(item_memory, continuous_memory)


class TestPrototypeTrainer:
    """Tests for the prototype trainer."""

    def test_one_prototype_per_label(self, recording):
        """Test [1,1,1,2,2,2] with N=1 gives two prototypes of three windows."""
        dataset, labels = recording([1, 1, 1, 2, 2, 2], channels=2)
        trainer = PrototypeTrainer(make_encoder())
        memory = trainer.train(dataset, labels, Spatial())

        assert len(memory) == 2
        assert trainer.exemplar_counts == {1: 3, 2: 3}
        assert trainer.label_offset == 1

    def test_prototype_is_bundle_of_windows(self, recording):
        """Test that a prototype equals the bundle of its encoded windows."""
        dataset, labels = recording([1, 1, 1, 2, 2, 2], channels=2)
        encoder = make_encoder(vector_type=IntegerHypervector)
        memory = train_associative_memory(dataset, labels, encoder, Spatial())
        expected = bundle([encoder.encode(dataset, i, Spatial()) for i in range(3, 6)])
        assert memory[1] == expected

    def test_straddling_windows_excluded(self, recording):
        """Test that N-grams across a label change are not used."""
        dataset, labels = recording([1, 1, 1, 2, 2, 2], channels=2)
        trainer = PrototypeTrainer(make_encoder())
        memory = trainer.train(dataset, labels, Temporal(2))

        assert len(memory) == 2
        assert trainer.exemplar_counts == {1: 2, 2: 2}

    def test_label_without_window_fails(self, recording):
        """Test that a class too short for one window is rejected."""
        dataset, labels = recording([1, 1, 1, 2, 3, 3], channels=2)
        with pytest.raises(ValueError, match="Label 2"):
            PrototypeTrainer(make_encoder()).train(dataset, labels, Temporal(2))

    def test_misaligned_inputs(self, recording):
        """Test that dataset and labels must align."""
        dataset, _ = recording([1, 1, 2], channels=2)
        with pytest.raises(ValueError):
            PrototypeTrainer(make_encoder()).train(dataset, [1, 1], Spatial())

    def test_shorter_than_window(self, recording):
        """Test that training data must hold one window."""
        dataset, labels = recording([1, 1], channels=2)
        with pytest.raises(ValueError):
            PrototypeTrainer(make_encoder()).train(dataset, labels, Temporal(3))


class TestEndToEnd:
    """Full pipeline sanity checks on synthetic data."""

    @pytest.mark.parametrize(
        "vector_type", [BipolarHypervector, IntegerHypervector, RealHypervector],
    )
    def test_spatial_point_accuracy(self, recording, vector_type):
        """Test >= 95% point accuracy on two separated clusters."""
        dataset, labels = recording([1] * 50 + [2] * 50, channels=2)
        encoder = make_encoder(vector_type=vector_type)
        trainer = PrototypeTrainer(encoder)
        memory = trainer.train(dataset, labels, Spatial())

        accuracy = predict_point(dataset, labels, encoder, memory, Spatial(), trainer.label_offset)
        assert accuracy >= 95.0

    def test_temporal_run_accuracy(self, recording):
        """Test run-sliced accuracy with N-gram encoding."""
        encoder = make_encoder()
        train_data, train_labels = recording([1] * 20 + [2] * 20, channels=2, seed=1)
        trainer = PrototypeTrainer(encoder)
        memory = trainer.train(train_data, train_labels, Temporal(3))

        test_data, test_labels = recording([1] * 10 + [2] * 10 + [1] * 10, channels=2, seed=2)
        accuracy = evaluate_by_run(
            test_data, test_labels, encoder, memory, Temporal(3), trainer.label_offset,
        )
        assert accuracy == 100.0


class TestExperimentConfig:
    """Tests for experiment configuration."""

    def test_defaults(self):
        """Test the reference defaults."""
        config = ExperimentConfig()
        assert config.dim == 10000
        assert config.levels == 10
        assert config.mode == Spatial()
        assert config.vector_type is BipolarHypervector
        assert config.uses_point_prediction

    def test_temporal_mode(self):
        """Test that N > 1 selects run-sliced temporal evaluation."""
        config = ExperimentConfig(ngram=4)
        assert config.mode == Temporal(4)
        assert not config.uses_point_prediction
        assert ExperimentConfig(ngram=4, evaluation="point").uses_point_prediction

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"dim": 0},
            {"levels": 0},
            {"ngram": 0},
            {"training_fraction": 0.0},
            {"training_fraction": 1.5},
            {"downsample": 0},
            {"amplitude_range": (20.0, 0.0)},
            {"representation": "complex"},
            {"evaluation": "vote"},
            {"downsample_overrides": {5: 0}},
        ],
    )
    def test_invalid(self, kwargs):
        """Test that invalid values are rejected."""
        with pytest.raises(ValueError):
            ExperimentConfig(**kwargs)

    def test_downsample_overrides(self):
        """Test per-subject downsampling."""
        config = ExperimentConfig(downsample=250, downsample_overrides={5: 50})
        assert config.downsample_for(1) == 250
        assert config.downsample_for(5) == 50

    def test_describe(self):
        """Test the configuration summary line."""
        text = ExperimentConfig(ngram=4, downsample=250).describe()
        assert "Encode type: TEMPORAL" in text
        assert "N-grams: 4" in text
        assert "Downsample: 250" in text


class TestRunSubject:
    """Tests for one subject's experiment."""

    def test_spatial_subject(self, recording):
        """Test the spatial experiment on an interleaved recording."""
        dataset, labels = recording([1] * 40 + [2] * 40 + [1] * 40 + [2] * 40)
        config = ExperimentConfig(dim=2000, levels=2, training_fraction=0.5, seed=0)
        result = run_subject(dataset, labels, config, build_encoder(config), subject=1)

        assert result.accuracy == 100.0
        assert result.num_test == 160
        assert result.num_train == 80
        assert result.num_prototypes == 2
        assert result.exemplar_counts == {1: 40, 2: 40}

    def test_temporal_subject(self, recording):
        """Test the temporal experiment with downsampling."""
        dataset, labels = recording([1] * 40 + [2] * 40 + [1] * 40 + [2] * 40)
        config = ExperimentConfig(
            dim=2000, levels=2, ngram=3, downsample=2, training_fraction=0.5, seed=0,
        )
        result = run_subject(dataset, labels, config, build_encoder(config), subject=1)

        assert result.num_test == 80
        assert result.accuracy == 100.0
