"""Constraint extraction strategies."""
from .base import ConstraintExtractor
from .generative import GenerativeConstraintExtractor
from .heuristic import HeuristicConstraintExtractor

__all__ = [
    "ConstraintExtractor",
    "GenerativeConstraintExtractor",
    "HeuristicConstraintExtractor",
]
