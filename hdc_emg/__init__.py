"""
HDC-EMG: Hyperdimensional Computing for EMG hand-gesture recognition.

This package implements the HDC classifier from "Hyperdimensional biosignal
processing: A case study for EMG-based hand gesture recognition" by Rahimi et
al.: EMG amplitudes are quantized, projected into pseudo-random
hypervectors, combined into spatial or temporal (N-gram) queries and matched
against per-class prototypes by nearest-neighbour search.
"""

from hdc_emg.vectors import (
    Hypervector,
    BipolarHypervector,
    IntegerHypervector,
    RealHypervector,
    Representation,
    get_vector_type,
)
from hdc_emg.memory import (
    ItemMemory,
    ContinuousItemMemory,
    AssociativeMemory,
    quantize,
)
from hdc_emg.models import (
    Encoder,
    Spatial,
    Temporal,
    predict_point,
    predict_window_max,
    evaluate_by_run,
)
from hdc_emg.utils import (
    ExperimentConfig,
    PrototypeTrainer,
    run_subject,
    train_associative_memory,
)

__version__ = "0.1.0"
__all__ = [
    # Vectors
    "Hypervector",
    "BipolarHypervector",
    "IntegerHypervector",
    "RealHypervector",
    "Representation",
    "get_vector_type",
    # Memory
    "ItemMemory",
    "ContinuousItemMemory",
    "AssociativeMemory",
    "quantize",
    # Models
    "Encoder",
    "Spatial",
    "Temporal",
    "predict_point",
    "predict_window_max",
    "evaluate_by_run",
    # Training
    "ExperimentConfig",
    "PrototypeTrainer",
    "run_subject",
    "train_associative_memory",
]
