"""
Memory structures for HDC-EMG.

This module implements the three lookup structures of the classifier:
- Item Memory: independent random vectors for unordered symbols (channels)
- Continuous Item Memory: correlated vectors for ordered quantization levels
- Associative Memory: class prototypes with nearest-neighbour search
"""

from hdc_emg.memory.item import ItemMemory
from hdc_emg.memory.continuous import ContinuousItemMemory, quantize
from hdc_emg.memory.associative import AssociativeMemory

__all__ = [
    "ItemMemory",
    "ContinuousItemMemory",
    "AssociativeMemory",
    "quantize",
]
