# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

import math

import numpy as np
import pytest

import mpcdfill
from mpcdfill.conftest import pickling_check
from mpcdfill.error import MutabilityError, TypeConversionError
from mpcdfill.mpcd import _mpcd


@pytest.fixture
def sine_geometry():
    return _mpcd.SineGeometry(
        L=20.0,
        amplitude=1.0,
        H=2.0,
        repetitions=2,
        velocity=0.5,
        boundary_condition=_mpcd.BoundaryCondition.no_slip,
    )


class TestSineGeometry:
    def test_values(self, sine_geometry):
        assert sine_geometry.wavenumber == pytest.approx(math.pi / 10.0)
        assert sine_geometry.wide_half_width == 4.0
        assert sine_geometry.boundary_condition == _mpcd.BoundaryCondition.no_slip

    def test_immutable(self, sine_geometry):
        with pytest.raises(AttributeError):
            sine_geometry.amplitude = 2.0

    def test_wall_offset(self, sine_geometry):
        # widest at x = 0, narrowest half a period later
        assert sine_geometry.wall_offset(0.0, 1.0) == pytest.approx(4.0)
        assert sine_geometry.wall_offset(0.0, -1.0) == pytest.approx(-4.0)
        assert sine_geometry.wall_offset(10.0, 1.0) == pytest.approx(2.0)
        assert sine_geometry.wall_offset(5.0, 1.0) == pytest.approx(3.0)

        # periodic in the lateral direction
        assert sine_geometry.wall_offset(-3.0, 1.0) == pytest.approx(
            sine_geometry.wall_offset(17.0, 1.0)
        )

    def test_wall_velocity(self, sine_geometry):
        assert sine_geometry.wall_velocity(1.0) == 0.5
        assert sine_geometry.wall_velocity(-1.0) == -0.5

    def test_is_outside(self, sine_geometry):
        assert not sine_geometry.is_outside(0.0, 0.0)
        assert not sine_geometry.is_outside(0.0, 3.9)
        assert sine_geometry.is_outside(0.0, 4.1)
        assert sine_geometry.is_outside(0.0, -4.1)
        assert sine_geometry.is_outside(10.0, 2.1)
        assert not sine_geometry.is_outside(10.0, -1.9)

    def test_validate_box(self, sine_geometry):
        assert sine_geometry.validate_box(mpcdfill.Box(20, 20, 10), 1.0)
        assert not sine_geometry.validate_box(mpcdfill.Box(20, 20, 10), 1.5)
        assert not sine_geometry.validate_box(mpcdfill.Box(20, 20, 6), 0.5)

    def test_flat(self):
        flat = _mpcd.SineGeometry(
            L=10.0,
            amplitude=0.0,
            H=3.0,
            repetitions=1,
            velocity=0.0,
            boundary_condition=_mpcd.BoundaryCondition.slip,
        )
        x = np.linspace(-5, 5, 11)
        for xi in x:
            assert flat.wall_offset(xi, 1.0) == pytest.approx(3.0)


class TestSineChannel:
    def test_create(self, state_factory):
        geom = mpcdfill.mpcd.geometry.SineChannel(
            amplitude=4.0, separation=2.0, repetitions=1, speed=0.5
        )
        assert geom.amplitude == 4.0
        assert geom.separation == 2.0
        assert geom.repetitions == 1
        assert geom.speed == 0.5
        assert geom.no_slip
        assert geom.H == 1.0
        assert geom.velocity == 0.5
        assert geom.boundary_condition == _mpcd.BoundaryCondition.no_slip

        state = state_factory(box=(16, 16, 30))
        geom._attach(state)
        assert geom.amplitude == 4.0
        assert geom.separation == 2.0
        assert geom._cpp_obj.L == 16.0
        assert geom._cpp_obj.H == 1.0
        assert geom._cpp_obj.velocity == 0.5
        assert geom._cpp_obj.wavenumber == pytest.approx(math.pi / 16.0)

        geom._detach()
        assert geom._cpp_obj is None

    def test_defaults(self):
        geom = mpcdfill.mpcd.geometry.SineChannel(amplitude=1.0, separation=2.0)
        assert geom.repetitions == 1
        assert geom.speed == 0.0
        assert geom.no_slip

        slip = mpcdfill.mpcd.geometry.SineChannel(
            amplitude=1.0, separation=2.0, no_slip=False
        )
        assert slip.boundary_condition == _mpcd.BoundaryCondition.slip

    def test_set_before_attach(self):
        geom = mpcdfill.mpcd.geometry.SineChannel(amplitude=1.0, separation=2.0)
        geom.amplitude = 2.0
        geom.separation = 6.0
        assert geom.amplitude == 2.0
        assert geom.H == 3.0

        with pytest.raises(TypeConversionError):
            geom.separation = 0.0
        with pytest.raises(TypeConversionError):
            geom.amplitude = -1.0
        assert geom.separation == 6.0

    def test_read_only_after_attach(self, state_factory):
        geom = mpcdfill.mpcd.geometry.SineChannel(amplitude=1.0, separation=2.0)
        geom._attach(state_factory())

        with pytest.raises(MutabilityError):
            geom.amplitude = 2.0
        with pytest.raises(MutabilityError):
            geom.separation = 4.0
        with pytest.raises(MutabilityError):
            geom.no_slip = False
        assert geom.amplitude == 1.0
        assert geom.separation == 2.0

        geom._detach()
        geom.amplitude = 2.0
        assert geom.amplitude == 2.0

    def test_pickling(self, state_factory):
        geom = mpcdfill.mpcd.geometry.SineChannel(
            amplitude=1.0, separation=2.0, repetitions=3, speed=-1.0
        )
        pickling_check(geom)

        geom._attach(state_factory())
        pickling_check(geom)
