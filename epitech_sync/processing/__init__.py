"""Event processing: normalization and reconciliation."""

from epitech_sync.processing.normalizer import normalize, normalize_all
from epitech_sync.processing.reconciler import Reconciler

__all__ = [
    "Reconciler",
    "normalize",
    "normalize_all",
]
