"""Test helper utilities for Job Market Analytics tests."""

from .dataset import SAMPLE_DATASET, build_store, load_dataset, make_posting

__all__ = ["SAMPLE_DATASET", "build_store", "load_dataset", "make_posting"]
