"""
Associative Memory for HDC-EMG.

The associative memory holds one prototype hypervector per class, in the
order the classes were trained. Classification is a nearest-neighbour search:
the query is compared with every prototype and the index of the closest one
is returned.

The index is not a label. Index 0 is the lowest label seen during training
and the following indices follow in increasing label order; callers add the
label offset themselves.
"""

from typing import Iterator, List, Optional

from hdc_emg.errors import DimensionMismatchError
from hdc_emg.vectors import Hypervector


class AssociativeMemory:
    """
    Ordered, append-only collection of class prototypes.

    Prototypes are appended during training only. After that the memory is
    read-only and may be shared by any number of classifiers.

    Args:
        prototypes: Optional initial prototypes, in class order
    """

    def __init__(self, prototypes: Optional[List[Hypervector]] = None):
        self._prototypes: List[Hypervector] = []
        for prototype in prototypes or []:
            self.append(prototype)

    def append(self, prototype: Hypervector):
        """
        Add a prototype at the next index.

        Raises:
            DimensionMismatchError: If the prototype does not match the
                representation and dimension of the stored ones
        """
        if not isinstance(prototype, Hypervector):
            raise DimensionMismatchError(
                f"Expected a Hypervector, got {type(prototype).__name__}"
            )
        if self._prototypes:
            self._prototypes[0].check_compatible(prototype)
        self._prototypes.append(prototype)

    def distances(self, query: Hypervector) -> List[float]:
        """Distance from ``query`` to every prototype, in index order."""
        return [query.distance(prototype) for prototype in self._prototypes]

    def search(self, query: Hypervector) -> int:
        """
        Index of the prototype closest to ``query``.

        Ties resolve to the lowest index.

        Raises:
            ValueError: If the memory is empty
        """
        if not self._prototypes:
            raise ValueError("Cannot search an empty associative memory")

        best_index = 0
        best_distance = float('inf')
        for index, dist in enumerate(self.distances(query)):
            if dist < best_distance:
                best_distance = dist
                best_index = index
        return best_index

    @property
    def dim(self) -> Optional[int]:
        """Dimension of the stored prototypes, or None while empty."""
        return self._prototypes[0].dim if self._prototypes else None

    def at(self, index: int) -> Hypervector:
        return self._prototypes[index]

    def __getitem__(self, index: int) -> Hypervector:
        return self._prototypes[index]

    def __len__(self) -> int:
        return len(self._prototypes)

    def __iter__(self) -> Iterator[Hypervector]:
        return iter(self._prototypes)
