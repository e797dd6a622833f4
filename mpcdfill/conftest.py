# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Code to support unit and validation tests.

``conftest`` is not part of mpcdfill's public API.
"""

import pickle

import pytest

import mpcdfill

devices = [mpcdfill.device.CPU]
if mpcdfill.device.GPU.is_available():
    devices.append(mpcdfill.device.GPU)


@pytest.fixture(params=devices)
def device(request):
    """Parameterized Device fixture.

    Tests that use `device` will be run once on the CPU and once on the GPU
    when one is available. Tests marked ``gpu`` only run with the GPU.
    """
    if request.node.get_closest_marker("gpu") is not None and (
        request.param is not mpcdfill.device.GPU
    ):
        pytest.skip("Test is run only on the GPU(s).")
    return request.param()


def pytest_runtest_setup(item):
    """Skip GPU tests that do not request a device when no GPU is present."""
    if item.get_closest_marker("gpu") is not None and not (
        mpcdfill.device.GPU.is_available()
    ):
        pytest.skip("Test requires a GPU.")


@pytest.fixture
def state_factory(device):
    """Make an empty MPCD state on the test device.

    The returned function accepts the `mpcdfill.State` arguments, with
    defaults for a 20 x 20 x 20 box holding no real particles.
    """

    def make_state(box=(20, 20, 20), N=0, types=("A",), mass=1.0, seed=42, **kwargs):
        return mpcdfill.State(
            box=box, N=N, types=types, mass=mass, seed=seed, device=device, **kwargs
        )

    return make_state


def pickling_check(instance):
    """Test that an instance can be pickled and unpickled."""
    pkled_instance = pickle.loads(pickle.dumps(instance))
    assert instance == pkled_instance
