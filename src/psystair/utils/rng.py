"""
rng.py
------

Random number utilities for psystair.

Trial randomness is drawn from JAX PRNG keys so that a run is fully
determined by its seed.

- seed: run key from an integer seed.
- split: advance a run key by one draw.
- RandomSource: interface the trial scheduler draws from.
- JaxRandomSource: RandomSource backed by a JAX key, split once per draw.

Tests can substitute any RandomSource (e.g. a scripted sequence of draws).

Examples
--------
>>> from psystair.utils.rng import JaxRandomSource, seed, split
>>> key = seed(0)
>>> key, draw = split(key)
>>> source = JaxRandomSource(key)
>>> 0.0 <= source.uniform() < 1.0
True
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod

import jax
import jax.random as jr


def seed(seed_value: numbers.Integral) -> jax.Array:
    """Key for a run seed; numpy integer seeds are accepted."""
    return jr.PRNGKey(int(seed_value))


def split(key: jax.Array) -> tuple[jax.Array, jax.Array]:
    """
    Advance a run key by one draw.

    Returns
    -------
    carry : jax.Array
        Key to keep for later draws.
    draw : jax.Array
        Key to sample exactly one value from, then discard.
    """
    carry, draw = jr.split(key)
    return carry, draw


class RandomSource(ABC):
    """Source of independent uniform draws on [0, 1)."""

    @abstractmethod
    def uniform(self) -> float:
        """Return one uniform draw on [0, 1)."""
        ...


class JaxRandomSource(RandomSource):
    """
    RandomSource backed by a JAX PRNG key.

    Parameters
    ----------
    key : jax.Array or int
        PRNG key, or an integer seed (Python or numpy) passed to seed().

    Notes
    -----
    The key is split before every draw; the carried key is never reused
    for sampling.
    """

    def __init__(self, key: jax.Array | numbers.Integral):
        self._key = seed(key) if isinstance(key, numbers.Integral) else key

    def uniform(self) -> float:
        self._key, subkey = split(self._key)
        return float(jr.uniform(subkey))
