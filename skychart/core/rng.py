"""Seeded random streams.
Same seed string, same sequence: re-rendering identical forecast data (after a
resize, say) places every particle in the same spot.
"""
from __future__ import annotations
from typing import Callable
import random

Rng = Callable[[], float]

MASK_32 = 0xFFFFFFFF
MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK_32


def hash_string(value: str) -> int:
    """djb2-style hash over UTF-16 code units, kept to 32 bits."""
    h = 0
    data = value.encode('utf-16-le')
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & MASK_32
    return h


def mulberry32(seed: int) -> Rng:
    """Mulberry32 generator returning floats in [0, 1)."""
    state = seed & MASK_32

    def next_float() -> float:
        nonlocal state
        state = (state + MULBERRY_INCREMENT) & MASK_32
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / 4294967296.0

    return next_float


def create_rng(seed: str) -> Rng:
    return mulberry32(hash_string(seed))


def default_rng() -> Rng:
    """Non-deterministic stream for purely decorative callers."""
    return random.random
