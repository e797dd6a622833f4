# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

import pickle

import pytest

import mpcdfill
from mpcdfill.data.typeconverter import variant_preprocessing
from mpcdfill.error import TypeConversionError


def test_constant():
    c = mpcdfill.variant.Constant(10.0)
    assert c.value == 10.0
    assert c(0) == 10.0
    assert c(1_000_000_000_000) == 10.0
    assert c.min == 10.0
    assert c.max == 10.0

    c.value = 2.5
    assert c(100) == 2.5


@pytest.mark.parametrize(
    "timestep,expected",
    [(0, 1.0), (10, 1.0), (60, 1.5), (110, 2.0), (500, 2.0)],
)
def test_ramp(timestep, expected):
    ramp = mpcdfill.variant.Ramp(A=1.0, B=2.0, t_start=10, t_ramp=100)
    assert ramp(timestep) == pytest.approx(expected)


def test_ramp_min_max():
    ramp = mpcdfill.variant.Ramp(A=3.0, B=-1.0, t_start=0, t_ramp=10)
    assert ramp.min == -1.0
    assert ramp.max == 3.0


def test_ramp_invalid():
    with pytest.raises(ValueError):
        mpcdfill.variant.Ramp(A=1.0, B=2.0, t_start=-1, t_ramp=10)


def test_custom():
    class Linear(mpcdfill.variant.Variant):
        def __call__(self, timestep):
            return 1.0 + 0.5 * timestep

    variant = Linear()
    assert variant(4) == 3.0
    with pytest.raises(NotImplementedError):
        variant.min


def test_equality():
    assert mpcdfill.variant.Constant(1.0) == mpcdfill.variant.Constant(1.0)
    assert mpcdfill.variant.Constant(1.0) != mpcdfill.variant.Constant(2.0)
    assert mpcdfill.variant.Constant(1.0) != mpcdfill.variant.Ramp(1, 1, 0, 1)


def test_pickling():
    ramp = mpcdfill.variant.Ramp(A=1.0, B=2.0, t_start=10, t_ramp=100)
    assert pickle.loads(pickle.dumps(ramp)) == ramp


def test_variant_like_conversion():
    converted = variant_preprocessing(4)
    assert isinstance(converted, mpcdfill.variant.Constant)
    assert converted(0) == 4.0

    ramp = mpcdfill.variant.Ramp(A=1.0, B=2.0, t_start=10, t_ramp=100)
    assert variant_preprocessing(ramp) is ramp

    with pytest.raises(TypeConversionError):
        variant_preprocessing("hot")
