"""
utils
=====

Shared helpers for psystair.

- rng : JAX PRNG key handling and the RandomSource used by the trial
  scheduler.
"""

from .rng import JaxRandomSource, RandomSource, seed, split

__all__ = ["JaxRandomSource", "RandomSource", "seed", "split"]
