"""Interval engine: overlap predicate, merge policies, and duration-mode generation."""

from .generator import GenerationResult, apply_generation, generate_windows, is_day_crossing
from .merge import merge_overlapping, merge_touching
from .overlap import find_overlapping, has_overlap, overlaps, touches, validate_window_set

__all__ = [
    "overlaps",
    "touches",
    "find_overlapping",
    "has_overlap",
    "validate_window_set",
    "merge_touching",
    "merge_overlapping",
    "GenerationResult",
    "generate_windows",
    "apply_generation",
    "is_day_crossing",
]
