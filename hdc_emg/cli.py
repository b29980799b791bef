"""
Command-line entry point: reproduce the per-subject EMG experiments.

Two experiments are run on the same item memories, as in the reference
study:

1. Spatial encoding on the full-rate recordings, scored point-wise
2. Temporal N-gram encoding on downsampled recordings, scored per label run

Usage:
    hdc-emg path/to/dataset --dim 10000 --levels 10 --hdc bin
"""

import argparse
import dataclasses
import logging
from typing import List, Optional

from hdc_emg.utils.data import load_subject
from hdc_emg.utils.training import ExperimentConfig, build_encoder, run_subject
from hdc_emg.vectors import Representation, get_vector_type

HDC_CHOICES = ["bin", "int", "float", "bipolar", "integer", "real"]

# Banner names printed before the experiments
BANNER_NAMES = {
    Representation.BIPOLAR: "binary",
    Representation.INTEGER: "int",
    Representation.REAL: "float",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hdc-emg",
        description="Hyperdimensional Computing classifier for EMG hand gestures.",
    )
    parser.add_argument("dataset", help="Path to the dataset dir.")
    parser.add_argument("-d", "--dim", type=int, default=10000, help="Hypervector dimension.")
    parser.add_argument("-l", "--levels", type=int, default=10, help="Number of levels.")
    parser.add_argument(
        "--hdc", choices=HDC_CHOICES, default="bin", help="Hypervector representation.",
    )
    parser.add_argument("--subjects", type=int, default=5, help="Number of subjects.")
    parser.add_argument(
        "--training-frac", type=float, default=0.25, help="Share of each class used for training.",
    )
    parser.add_argument("--ngram", type=int, default=4, help="N-gram size of the temporal experiment.")
    parser.add_argument("--spatial-downsample", type=int, default=1)
    parser.add_argument("--temporal-downsample", type=int, default=250)
    parser.add_argument(
        "--last-subject-downsample",
        type=int,
        default=50,
        help="Temporal downsampling of the last subject (0 uses --temporal-downsample).",
    )
    parser.add_argument("--amp-min", type=float, default=0.0, help="Bottom of the amplitude range.")
    parser.add_argument("--amp-max", type=float, default=20.0, help="Top of the amplitude range.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the item memories.")
    parser.add_argument(
        "--experiment", choices=["spatial", "temporal", "both"], default="both",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run_experiment(config: ExperimentConfig, encoder, subjects: List) -> List[float]:
    """Run ``config`` on every loaded subject and print one accuracy line each."""
    print(config.describe())
    accuracies = []
    for number, (dataset, labels) in enumerate(subjects, start=1):
        result = run_subject(dataset, labels, config, encoder, subject=number)
        print(f"Accuracy[{number}]: {result.accuracy}%")
        accuracies.append(result.accuracy)
    return accuracies


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    vector_type = get_vector_type(args.hdc)
    print(f"emg {BANNER_NAMES[vector_type.representation]}")

    base = ExperimentConfig(
        dim=args.dim,
        levels=args.levels,
        representation=args.hdc,
        training_fraction=args.training_frac,
        amplitude_range=(args.amp_min, args.amp_max),
        seed=args.seed,
    )

    subjects = [load_subject(args.dataset, i, base.channels) for i in range(1, args.subjects + 1)]

    # Both experiments share one pair of item memories
    encoder = build_encoder(base)

    if args.experiment in ("spatial", "both"):
        print("Spatial encoding")
        spatial = dataclasses.replace(base, ngram=1, downsample=args.spatial_downsample)
        run_experiment(spatial, encoder, subjects)

    if args.experiment in ("temporal", "both"):
        print("Temporal encoding")
        overrides = {}
        if args.last_subject_downsample > 0:
            overrides[args.subjects] = args.last_subject_downsample
        temporal = dataclasses.replace(
            base,
            ngram=args.ngram,
            downsample=args.temporal_downsample,
            downsample_overrides=overrides,
        )
        run_experiment(temporal, encoder, subjects)

    return 0
