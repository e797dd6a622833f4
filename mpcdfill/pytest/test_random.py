# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

import numpy as np
import pytest

import mpcdfill
from mpcdfill.random import RandomStream, philox4x32

# known answers of Philox4x32-10 from the Random123 distribution
_KAT = [
    ((0, 0, 0, 0, 0, 0), (0x6627E8D5, 0xE169C58D, 0xBC57AC4C, 0x9B00DBD8)),
    (
        (0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF),
        (0x408F276D, 0x41C83B0E, 0xA20BC7C6, 0x6D5451FD),
    ),
    (
        (0x243F6A88, 0x85A308D3, 0x13198A2E, 0x03707344, 0xA4093822, 0x299F31D0),
        (0xD16CFE09, 0x94FDCCEB, 0x5001E420, 0x24126EA1),
    ),
]


@pytest.mark.parametrize("args,expected", _KAT)
def test_philox_known_answers(args, expected):
    result = philox4x32(*args)
    assert tuple(int(r) for r in result) == expected


def test_key_layout():
    stream = RandomStream(
        seed=0x1234, tag=0, timestep=(5 << 32) + 17, identifier=0x7C
    )
    assert stream.key == ((0x7C << 16) | 0x1234, 17)

    # only the lowest 16 bits of the seed enter the key
    wide = RandomStream(seed=0xABCD1234, tag=0, timestep=17, identifier=0x7C)
    assert wide.key == stream.key


def test_deterministic():
    a = RandomStream(seed=42, tag=7, timestep=100)
    b = RandomStream(seed=42, tag=7, timestep=100)
    draws_a = [a.uniform(), a.uniform(-1, 1), a.normal(), a.normal(2.0)]
    draws_b = [b.uniform(), b.uniform(-1, 1), b.normal(), b.normal(2.0)]
    assert draws_a == draws_b


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(seed=43, tag=7, timestep=100),
        dict(seed=42, tag=8, timestep=100),
        dict(seed=42, tag=7, timestep=101),
        dict(seed=42, tag=7, timestep=100 + (1 << 32)),
        dict(seed=42, tag=7, timestep=100, identifier=0x7D),
    ],
)
def test_streams_differ(kwargs):
    reference = RandomStream(seed=42, tag=7, timestep=100)
    other = RandomStream(**kwargs)
    assert reference.uniform() != other.uniform()


def test_uniform_range():
    for tag in range(200):
        stream = RandomStream(seed=1, tag=tag, timestep=3)
        x = stream.uniform(-5.0, 5.0)
        assert -5.0 <= x < 5.0

        # reversed bounds give values in (b, a]
        z = stream.uniform(0.0, -0.5)
        assert -0.5 < z <= 0.0


def test_counter_advances():
    stream = RandomStream(seed=1, tag=2, timestep=3)
    assert stream.counter == 0
    stream.uniform()
    stream.uniform()
    assert stream.counter == 2

    # normals are made in pairs, the second call uses the cached value
    stream.normal()
    assert stream.counter == 3
    stream.normal()
    assert stream.counter == 3
    stream.normal()
    assert stream.counter == 4


def test_normal_pair_cached():
    stream = RandomStream(seed=9, tag=4, timestep=11)
    first = stream.normal(1.0)
    second = stream.normal(1.0)

    k0, k1 = stream._key
    c0, c1 = stream._counter
    expected = mpcdfill.random.draw_normal_pair(k0, k1, c0, c1, 0, 1.0)
    assert first == pytest.approx(expected[0])
    assert second == pytest.approx(expected[1])


def test_statistics():
    uniforms = []
    normals = []
    for tag in range(4000):
        stream = RandomStream(seed=5, tag=tag, timestep=0)
        uniforms.append(stream.uniform())
        normals.append(stream.normal(2.0))
        normals.append(stream.normal(2.0))

    uniforms = np.array(uniforms)
    normals = np.array(normals)
    assert np.mean(uniforms) == pytest.approx(0.5, abs=0.02)
    assert np.var(uniforms) == pytest.approx(1.0 / 12.0, rel=0.05)
    assert np.mean(normals) == pytest.approx(0.0, abs=0.1)
    assert np.std(normals) == pytest.approx(2.0, rel=0.05)
    assert np.all(np.isfinite(normals))
