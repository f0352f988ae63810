"""
Peak reduction of a PCM sample stream into a short list of amplitudes.

Each window of ``chunk_size`` consecutive samples is represented by its
largest raw value (not magnitude, not RMS), then scaled onto [-1, 1]
against a fixed reference bit depth so that 16-bit and 24-bit files
draw at the same height.
"""
from __future__ import annotations
from typing import Sequence, Union
import numpy as np

from .config import REFERENCE_BIT_DEPTH
from .errors import DegenerateInputError

SampleInput = Union[Sequence[int], np.ndarray]


def full_scale(bits: int) -> int:
    """Largest positive value of a signed ``bits``-wide sample (8_388_607 for 24)."""
    return (1 << (bits - 1)) - 1


def chunk_size(sample_count: int, group_count: int) -> int:
    if group_count < 1:
        raise ValueError(f"group_count must be >= 1, got {group_count}")
    return max(1, sample_count // group_count)


def normalize(values: SampleInput, source_bit_depth: int,
              reference_bit_depth: int = REFERENCE_BIT_DEPTH) -> np.ndarray:
    v = np.asarray(values, dtype=np.int64)
    shift = reference_bit_depth - source_bit_depth
    v = v << shift if shift >= 0 else v >> -shift
    # the negative extreme sits one step past full scale
    return np.clip(v / float(full_scale(reference_bit_depth)), -1.0, 1.0).astype(np.float32)


def reduce(samples: SampleInput, source_bit_depth: int, group_count: int,
           reference_bit_depth: int = REFERENCE_BIT_DEPTH) -> np.ndarray:
    """Return ``min(group_count, len(samples))`` normalized window peaks.

    Samples past the last full window are dropped.
    """
    data = np.asarray(samples, dtype=np.int64).ravel()
    if data.size == 0:
        raise DegenerateInputError("no samples to reduce")
    size = chunk_size(data.size, group_count)
    count = min(group_count, data.size // size)
    peaks = data[: count * size].reshape(count, size).max(axis=1)
    return normalize(peaks, source_bit_depth, reference_bit_depth)
