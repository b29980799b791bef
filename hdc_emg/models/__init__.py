"""
Encoding and classification models for HDC-EMG.

This module implements the query side of the classifier:
- Encoder: spatial (single instant) and temporal (N-gram) query vectors
- Classifier procedures: point-wise, window-max and run-sliced prediction
"""

from hdc_emg.models.encoder import (
    Encoder,
    EncodingMode,
    Spatial,
    Temporal,
    encoding_mode,
)
from hdc_emg.models.classifier import (
    evaluate_by_run,
    predict_label,
    predict_point,
    predict_window_max,
    run_boundaries,
)

__all__ = [
    "Encoder",
    "EncodingMode",
    "Spatial",
    "Temporal",
    "encoding_mode",
    "predict_label",
    "predict_point",
    "predict_window_max",
    "evaluate_by_run",
    "run_boundaries",
]
