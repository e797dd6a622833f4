# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

import numpy
import pytest

import mpcdfill
from mpcdfill.data import NO_CELL, MPCDParticleData
from mpcdfill.error import DataAccessError


@pytest.fixture
def particle_data():
    position = [[0.0, 1.0, 2.0], [-1.0, -2.0, -3.0], [4.0, 0.0, 0.5]]
    velocity = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    return MPCDParticleData(
        N=3,
        types=["A", "B"],
        mass=2.0,
        position=position,
        velocity=velocity,
        typeid=[0, 1, 0],
    )


def test_initial_values(particle_data):
    assert particle_data.N == 3
    assert particle_data.N_virtual == 0
    assert particle_data.N_global == 3
    assert particle_data.N_virtual_global == 0
    assert particle_data.types == ["A", "B"]
    assert particle_data.mass == 2.0

    numpy.testing.assert_array_equal(particle_data.get_tag(), [0, 1, 2])
    numpy.testing.assert_array_equal(particle_data.get_typeid(), [0, 1, 0])
    numpy.testing.assert_array_equal(particle_data.get_cell(), [NO_CELL] * 3)
    numpy.testing.assert_array_equal(
        particle_data.get_position()[1], [-1.0, -2.0, -3.0]
    )


def test_type_index(particle_data):
    assert particle_data.type_index("A") == 0
    assert particle_data.type_index("B") == 1
    with pytest.raises(ValueError):
        particle_data.type_index("C")


def test_no_types():
    with pytest.raises(ValueError):
        MPCDParticleData(N=0, types=[])


def test_add_virtual_particles(particle_data):
    first_idx = particle_data.add_virtual_particles(10)
    assert first_idx == 3
    assert particle_data.N_virtual == 10
    assert particle_data.capacity >= 13

    # real particles survive the reallocation
    numpy.testing.assert_array_equal(particle_data.get_tag(), [0, 1, 2])
    numpy.testing.assert_array_equal(
        particle_data.get_position()[2], [4.0, 0.0, 0.5]
    )

    first_idx = particle_data.add_virtual_particles(5)
    assert first_idx == 13
    assert particle_data.N_virtual == 15
    assert particle_data.get_tag("virtual").shape == (15,)
    assert particle_data.get_tag("both").shape == (18,)

    particle_data.remove_virtual_particles()
    assert particle_data.N_virtual == 0
    assert particle_data.get_position("virtual").shape == (0, 3)

    # capacity is kept for the next fill
    capacity = particle_data.capacity
    assert particle_data.add_virtual_particles(15) == 3
    assert particle_data.capacity == capacity


def test_add_virtual_particles_invalid(particle_data):
    with pytest.raises(ValueError):
        particle_data.add_virtual_particles(-1)
    with pytest.raises(ValueError):
        particle_data.get_tag("ghost")


def test_local_snapshot(state_factory):
    state = state_factory(
        N=2, position=[[1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]], types=["A", "B"]
    )
    state._mpcd_data.add_virtual_particles(3)

    with state.cpu_local_snapshot as snap:
        assert snap.global_box == state.box
        assert snap.mpcd.position.shape == (2, 3)
        assert snap.mpcd.virtual_position.shape == (3, 3)
        assert snap.mpcd.position_with_virtual.shape == (5, 3)
        numpy.testing.assert_array_equal(snap.mpcd.tag, [0, 1])

        # writable fields write through to the state
        snap.mpcd.velocity = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
        numpy.testing.assert_array_equal(
            state._mpcd_data.get_velocity()[1], [0.0, 1.0, 0.0]
        )

        with pytest.raises(RuntimeError):
            snap.mpcd.tag = [5, 6]
        with pytest.raises(AttributeError):
            snap.mpcd.charge
        with pytest.raises(ValueError):
            snap.mpcd.virtual_position_with_virtual

        with pytest.raises(RuntimeError):
            state.cpu_local_snapshot

    with pytest.raises(DataAccessError):
        snap.mpcd.position


def test_state(state_factory, device):
    state = state_factory(box=mpcdfill.Box(10, 12, 14), N=4, seed=0x12345)
    assert state.box == mpcdfill.Box(10, 12, 14)
    assert state.device is device
    assert state.seed == 0x2345
    assert state.mpcd_types == ["A"]
    assert state.N_mpcd_particles == 4
    assert state.N_virtual_particles == 0

    state.seed = 7
    assert state.seed == 7

    # box is returned as a copy
    box = state.box
    box._L[0] = 1.0
    assert state.box.Lx == 10.0


def test_box():
    box = mpcdfill.Box(10, 20, 30)
    numpy.testing.assert_array_equal(box.lo, [-5, -10, -15])
    numpy.testing.assert_array_equal(box.hi, [5, 10, 15])
    assert box.volume == 6000.0
    assert mpcdfill.Box.cube(4) == mpcdfill.Box(4, 4, 4)
    assert mpcdfill.Box.from_box([10, 20, 30]) == box

    with pytest.raises(ValueError):
        mpcdfill.Box(0, 1, 1)


def test_remove_some_virtual_particles(particle_data):
    particle_data.add_virtual_particles(10)
    particle_data.add_virtual_particles(4)
    particle_data.remove_virtual_particles(4)
    assert particle_data.N_virtual == 10
    assert particle_data.add_virtual_particles(2) == 13

    with pytest.raises(ValueError):
        particle_data.remove_virtual_particles(13)
    with pytest.raises(ValueError):
        particle_data.remove_virtual_particles(-1)
    assert particle_data.N_virtual == 12
