"""
Hypervector representations for HDC-EMG.

Three interchangeable representations share the bind/bundle/permute/distance
algebra defined by ``Hypervector``:
- BipolarHypervector: {-1, +1} elements, majority bundling, Hamming distance
- IntegerHypervector: int32 elements, summed bundling, cosine distance
- RealHypervector: float32 Gaussian elements, summed bundling, cosine distance
"""

from typing import Dict, Type, Union

from hdc_emg.vectors.hypervector import (
    BundleAccumulator,
    Hypervector,
    Representation,
    bind,
    bundle,
    distance,
    permute,
)
from hdc_emg.vectors.bipolar import BipolarHypervector
from hdc_emg.vectors.integer import IntegerHypervector
from hdc_emg.vectors.real import RealHypervector

VECTOR_TYPES: Dict[Representation, Type[Hypervector]] = {
    Representation.BIPOLAR: BipolarHypervector,
    Representation.INTEGER: IntegerHypervector,
    Representation.REAL: RealHypervector,
}

# Names accepted by the command line, including short aliases
_ALIASES = {
    "bin": Representation.BIPOLAR,
    "binary": Representation.BIPOLAR,
    "bipolar": Representation.BIPOLAR,
    "int": Representation.INTEGER,
    "integer": Representation.INTEGER,
    "float": Representation.REAL,
    "real": Representation.REAL,
}


def get_vector_type(name: Union[str, Representation]) -> Type[Hypervector]:
    """
    Resolve a representation name to its hypervector class.

    Args:
        name: A ``Representation`` or one of its names/aliases
            ("bin", "int", "float", "bipolar", "integer", "real")

    Returns:
        The concrete ``Hypervector`` subclass
    """
    if isinstance(name, Representation):
        return VECTOR_TYPES[name]
    key = str(name).lower()
    if key not in _ALIASES:
        raise ValueError(
            f"Unknown hypervector representation: {name!r} "
            f"(expected one of {sorted(_ALIASES)})"
        )
    return VECTOR_TYPES[_ALIASES[key]]


__all__ = [
    "Hypervector",
    "BundleAccumulator",
    "Representation",
    "BipolarHypervector",
    "IntegerHypervector",
    "RealHypervector",
    "VECTOR_TYPES",
    "get_vector_type",
    "bind",
    "bundle",
    "permute",
    "distance",
]
