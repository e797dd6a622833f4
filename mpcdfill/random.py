# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

r"""Counter-based random number streams.

Every random number drawn by a kernel comes from a stream identified by the
key tuple (seed, identifier, tag, timestep). The stream is evaluated with the
Philox4x32-10 bijection of Salmon et al. (Random123): the key and counter are
hashed directly into random bits, so there is no generator state to carry
between particles, threads or devices. Two evaluations with the same key tuple
produce the same numbers no matter which thread performs them, how work is
grouped, or whether the simulation was restarted in between.

The layout of the 2x32 bit key and the 4x32 bit counter is:

.. code-block:: none

    key     = (identifier << 16 | seed, timestep[0:32])
    counter = (tag, timestep[32:64], 0, n)

where ``n`` numbers the draws made from one stream.

The scalar functions in this module are plain Python functions registered with
`numba.extending.register_jitable`. They run in the interpreter when called
from Python (see `RandomStream`) and are compiled into the CPU and CUDA fill
kernels when called from them.

.. rubric:: Example:

.. code-block:: python

    stream = mpcdfill.random.RandomStream(seed=42, tag=7, timestep=100)
    x = stream.uniform(0.0, 10.0)
    vx = stream.normal(1.0)
"""

import math

import numpy as np
from numba.extending import register_jitable

_PHILOX_M0 = np.uint64(0xD2511F53)
_PHILOX_M1 = np.uint64(0xCD9E8D57)
_PHILOX_W0 = np.uint64(0x9E3779B9)
_PHILOX_W1 = np.uint64(0xBB67AE85)
_MASK16 = np.uint64(0xFFFF)
_MASK32 = np.uint64(0xFFFFFFFF)
_SHIFT11 = np.uint64(11)
_SHIFT16 = np.uint64(16)
_SHIFT32 = np.uint64(32)
_ZERO = np.uint64(0)
_TWO_POW_M53 = 1.0 / 9007199254740992.0
_TWO_PI = 2.0 * math.pi


class RNGIdentifier:
    """Identifiers of the operations that draw random numbers.

    Each operation mixes its identifier into the key so that two operations
    never draw from the same stream for the same particle and time step.
    """

    SineGeometryFiller = 0x7C


@register_jitable
def philox4x32(c0, c1, c2, c3, k0, k1):
    """Evaluate the Philox4x32-10 bijection.

    Args:
        c0, c1, c2, c3: 32 bit counter words.
        k0, k1: 32 bit key words.

    Returns:
        tuple: Four 32 bit random words as ``numpy.uint64``.
    """
    x0 = np.uint64(c0) & _MASK32
    x1 = np.uint64(c1) & _MASK32
    x2 = np.uint64(c2) & _MASK32
    x3 = np.uint64(c3) & _MASK32
    y0 = np.uint64(k0) & _MASK32
    y1 = np.uint64(k1) & _MASK32
    for _ in range(10):
        p0 = _PHILOX_M0 * x0
        p1 = _PHILOX_M1 * x2
        x0, x1, x2, x3 = (
            (p1 >> _SHIFT32) ^ x1 ^ y0,
            p1 & _MASK32,
            (p0 >> _SHIFT32) ^ x3 ^ y1,
            p0 & _MASK32,
        )
        y0 = (y0 + _PHILOX_W0) & _MASK32
        y1 = (y1 + _PHILOX_W1) & _MASK32
    return x0, x1, x2, x3


@register_jitable
def make_key(seed, identifier, timestep):
    """Build the Philox key of a stream.

    Returns:
        tuple: The two key words.
    """
    k0 = ((np.uint64(identifier) << _SHIFT16) | (np.uint64(seed) & _MASK16)) & _MASK32
    k1 = np.uint64(timestep) & _MASK32
    return k0, k1


@register_jitable
def make_counter(tag, timestep):
    """Build the fixed counter words of a stream.

    Returns:
        tuple: The first two counter words.
    """
    c0 = np.uint64(tag) & _MASK32
    c1 = (np.uint64(timestep) >> _SHIFT32) & _MASK32
    return c0, c1


@register_jitable
def to_canonical(hi, lo):
    """Convert two 32 bit words to a double in [0, 1) with 53 random bits."""
    u = (np.uint64(hi) << _SHIFT32) | np.uint64(lo)
    return np.float64(u >> _SHIFT11) * _TWO_POW_M53


@register_jitable
def draw_uniform(k0, k1, c0, c1, n, a, b):
    """Draw the ``n``-th number of a stream, uniform in [a, b).

    When ``b < a`` the value lies in (b, a].
    """
    r0, r1, r2, r3 = philox4x32(c0, c1, _ZERO, n, k0, k1)
    return a + (b - a) * to_canonical(r0, r1)


@register_jitable
def draw_normal_pair(k0, k1, c0, c1, n, sigma):
    """Draw two independent normal numbers from the ``n``-th counter.

    Uses the Box-Muller transform. Both numbers have zero mean and standard
    deviation ``sigma``.
    """
    r0, r1, r2, r3 = philox4x32(c0, c1, _ZERO, n, k0, k1)
    # 1 - u lies in (0, 1] so the logarithm is finite
    u1 = 1.0 - to_canonical(r0, r1)
    u2 = to_canonical(r2, r3)
    radius = sigma * math.sqrt(-2.0 * math.log(u1))
    theta = _TWO_PI * u2
    return radius * math.cos(theta), radius * math.sin(theta)


class RandomStream:
    """Deterministic random number stream of one particle.

    Args:
        seed (int): Global random number seed (lowest 16 bits are used).
        tag (int): Particle tag.
        timestep (int): Time step.
        identifier (int): Operation identifier, see `RNGIdentifier`.

    Draws are numbered in the order they are made. Each call to `uniform`
    consumes one counter value. `normal` generates numbers in pairs: the first
    call consumes one counter value and the second call returns the other
    member of the pair.

    The sequence of draws depends only on the arguments, so the fill kernels
    and a `RandomStream` constructed with the same arguments produce the same
    numbers.

    .. rubric:: Example:

    .. code-block:: python

        stream = mpcdfill.random.RandomStream(seed=1, tag=0, timestep=10)
        x, y = stream.uniform(-5, 5), stream.uniform(-5, 5)
    """

    def __init__(
        self, seed, tag, timestep, identifier=RNGIdentifier.SineGeometryFiller
    ):
        self._key = make_key(seed, identifier, timestep)
        self._counter = make_counter(tag, timestep)
        self._n = 0
        self._cached_normal = None

    @property
    def key(self):
        """tuple[int, int]: The Philox key words."""
        return tuple(int(k) for k in self._key)

    @property
    def counter(self):
        """int: Number of counter values consumed so far."""
        return self._n

    def uniform(self, a=0.0, b=1.0):
        """Draw a number uniformly distributed between ``a`` and ``b``.

        Args:
            a (float): Lower end of the range.
            b (float): Upper end of the range.

        Returns:
            float: The drawn number.
        """
        value = draw_uniform(
            self._key[0], self._key[1], self._counter[0], self._counter[1],
            self._n, float(a), float(b)
        )
        self._n += 1
        return float(value)

    def normal(self, sigma=1.0):
        """Draw a zero-mean normal number.

        Args:
            sigma (float): Standard deviation.

        Returns:
            float: The drawn number.
        """
        if self._cached_normal is not None:
            value = self._cached_normal
            self._cached_normal = None
            return value

        first, second = draw_normal_pair(
            self._key[0], self._key[1], self._counter[0], self._counter[1],
            self._n, float(sigma)
        )
        self._n += 1
        self._cached_normal = float(second)
        return float(first)


__all__ = [
    "RNGIdentifier",
    "RandomStream",
    "philox4x32",
]
