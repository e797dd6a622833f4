# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Kernels that draw virtual particles around a sinusoidal channel.

One task draws one particle. Task ``idx`` in ``[0, N_fill)`` writes tag
``first_tag + idx`` at index ``first_idx + idx`` of the particle arrays, so the
tasks never write the same slot and may run in any order. The first half of
the tasks (``idx < N_fill // 2``) fill the region below the lower wall and the
second half fill the region above the upper wall.

`draw_particle` holds the per-task logic. `draw_particles_cpu` runs the tasks
in groups of ``block_size`` with a parallel numba loop over the groups, and
`draw_particles_gpu` launches one CUDA thread per task.
"""

import math

from numba import cuda, njit, prange
from numba.extending import register_jitable

from mpcdfill.data.particle_data import NO_CELL
from mpcdfill.random import (
    RNGIdentifier,
    draw_normal_pair,
    draw_uniform,
    make_counter,
    make_key,
)

_NO_CELL = float(NO_CELL)
_FILLER_ID = RNGIdentifier.SineGeometryFiller

# argument types of the CUDA fill kernel, in launch order
_GPU_SIGNATURE = (
    "void(float64[:, ::1], float64[:, ::1], uint32[::1], "
    + ", ".join(["float64"] * 11)
    + ", "
    + ", ".join(["int64"] * 5)
    + ")"
)


@register_jitable
def wall_offset(x, sign, A, k, H):
    """Position of the wall on side ``sign`` at lateral position ``x``."""
    return sign * (A * math.cos(k * x) + A + H)


@register_jitable
def region_sign(idx, N_fill):
    """Region of task ``idx``: -1 below the lower wall, +1 above the upper."""
    if idx >= N_fill // 2:
        return 1.0
    return -1.0


@register_jitable
def draw_particle(
    idx,
    pos,
    vel,
    tag,
    A,
    k,
    H,
    V,
    lo_x,
    hi_x,
    lo_y,
    hi_y,
    thickness,
    vel_factor,
    type_id,
    N_fill,
    first_tag,
    first_idx,
    timestep,
    seed,
):
    """Draw virtual particle ``idx``.

    The particle is placed uniformly in the shell of depth ``thickness``
    outside the wall and given a Maxwell-Boltzmann velocity with standard
    deviation ``vel_factor`` per component, shifted by the wall velocity in
    *x*.
    """
    if idx >= N_fill:
        return

    pidx = first_idx + idx
    ptag = first_tag + idx
    tag[pidx] = ptag

    sign = region_sign(idx, N_fill)

    k0, k1 = make_key(seed, _FILLER_ID, timestep)
    c0, c1 = make_counter(ptag, timestep)

    x = draw_uniform(k0, k1, c0, c1, 0, lo_x, hi_x)
    y = draw_uniform(k0, k1, c0, c1, 1, lo_y, hi_y)
    z0 = draw_uniform(k0, k1, c0, c1, 2, 0.0, sign * thickness)

    # the side of the wall follows the drawn offset, not the region
    if z0 >= 0.0:
        local_sign = 1.0
    else:
        local_sign = -1.0
    z = wall_offset(x, local_sign, A, k, H) + z0

    pos[pidx, 0] = x
    pos[pidx, 1] = y
    pos[pidx, 2] = z
    pos[pidx, 3] = type_id

    vx, vy = draw_normal_pair(k0, k1, c0, c1, 3, vel_factor)
    vz, unused = draw_normal_pair(k0, k1, c0, c1, 4, vel_factor)

    vel[pidx, 0] = vx + sign * V
    vel[pidx, 1] = vy
    vel[pidx, 2] = vz
    vel[pidx, 3] = _NO_CELL


def launch_configuration(N, block_size, max_block_size=None):
    """Compute the number of groups and the group size for ``N`` tasks.

    Args:
        N (int): Number of tasks.
        block_size (int): Requested number of tasks per group.
        max_block_size (int): Largest group size the executing kernel
            supports. `None` means unlimited.

    Returns:
        tuple[int, int]: ``(num_blocks, block_size)`` with ``block_size``
        clamped to ``[1, max_block_size]`` and
        ``num_blocks = ceil(N / block_size)``.
    """
    block_size = int(block_size)
    if max_block_size is not None:
        block_size = min(block_size, int(max_block_size))
    block_size = max(block_size, 1)
    num_blocks = (int(N) + block_size - 1) // block_size
    return num_blocks, block_size


def _kernel_arguments(geom, box, thickness, mass, type_id, N_fill, first_tag,
                      first_idx, kT, timestep, seed):
    lo = box.lo
    hi = box.hi
    vel_factor = math.sqrt(kT / mass)
    return (
        float(geom.amplitude),
        float(geom.wavenumber),
        float(geom.H),
        float(geom.velocity),
        float(lo[0]),
        float(hi[0]),
        float(lo[1]),
        float(hi[1]),
        float(thickness),
        vel_factor,
        float(type_id),
        int(N_fill),
        int(first_tag),
        int(first_idx),
        int(timestep),
        int(seed),
    )


@njit(parallel=True)
def _draw_particles_cpu_kernel(num_blocks, block_size, pos, vel, tag, A, k, H,
                               V, lo_x, hi_x, lo_y, hi_y, thickness,
                               vel_factor, type_id, N_fill, first_tag,
                               first_idx, timestep, seed):
    for block in prange(num_blocks):
        for thread in range(block_size):
            draw_particle(block * block_size + thread, pos, vel, tag, A, k, H,
                          V, lo_x, hi_x, lo_y, hi_y, thickness, vel_factor,
                          type_id, N_fill, first_tag, first_idx, timestep,
                          seed)


@cuda.jit
def _draw_particles_gpu_kernel(pos, vel, tag, A, k, H, V, lo_x, hi_x, lo_y,
                               hi_y, thickness, vel_factor, type_id, N_fill,
                               first_tag, first_idx, timestep, seed):
    idx = cuda.grid(1)
    draw_particle(idx, pos, vel, tag, A, k, H, V, lo_x, hi_x, lo_y, hi_y,
                  thickness, vel_factor, type_id, N_fill, first_tag,
                  first_idx, timestep, seed)


def draw_particles_cpu(pos, vel, tag, geom, box, thickness, mass, type_id,
                       N_fill, first_tag, first_idx, kT, timestep, seed,
                       block_size):
    """Draw virtual particles on the CPU.

    Args:
        pos ((*capacity*, 4) `numpy.ndarray`): Positions and type ids.
        vel ((*capacity*, 4) `numpy.ndarray`): Velocities and cells.
        tag ((*capacity*,) `numpy.ndarray` of ``uint32``): Tags.
        geom (mpcdfill.mpcd._mpcd.SineGeometry): Channel geometry.
        box (mpcdfill.Box): Simulation box.
        thickness (float): Depth of the fill shell outside each wall.
        mass (float): Particle mass.
        type_id (int): Type of the virtual particles.
        N_fill (int): Number of particles to draw.
        first_tag (int): Tag of the first particle.
        first_idx (int): Array index of the first particle.
        kT (float): Temperature.
        timestep (int): Current time step.
        seed (int): Random number seed.
        block_size (int): Number of particles drawn by one parallel task.

    The caller guarantees that ``first_idx + N_fill`` does not exceed the
    array capacity and that no one else writes these slots concurrently.
    """
    if N_fill == 0:
        return

    num_blocks, block_size = launch_configuration(N_fill, block_size)
    _draw_particles_cpu_kernel(
        num_blocks,
        block_size,
        pos,
        vel,
        tag,
        *_kernel_arguments(geom, box, thickness, mass, type_id, N_fill,
                           first_tag, first_idx, kT, timestep, seed),
    )


def gpu_max_block_size():
    """Query the largest block size the CUDA fill kernel supports.

    Compiles the kernel for the current device when needed.

    Returns:
        int: Maximum number of threads per block.
    """
    kernel = _draw_particles_gpu_kernel.compile(_GPU_SIGNATURE)
    return kernel.max_threads_per_block


def draw_particles_gpu(d_pos, d_vel, d_tag, geom, box, thickness, mass,
                       type_id, N_fill, first_tag, first_idx, kT, timestep,
                       seed, block_size, max_block_size):
    """Draw virtual particles on the GPU.

    Takes the same arguments as `draw_particles_cpu` with the arrays in
    device memory, plus ``max_block_size``, the limit reported by
    `gpu_max_block_size`.

    Waits for the kernel to complete before returning. Errors raised by the
    CUDA driver propagate to the caller unchanged.
    """
    if N_fill == 0:
        return

    num_blocks, block_size = launch_configuration(N_fill, block_size,
                                                  max_block_size)
    _draw_particles_gpu_kernel[num_blocks, block_size](
        d_pos,
        d_vel,
        d_tag,
        *_kernel_arguments(geom, box, thickness, mass, type_id, N_fill,
                           first_tag, first_idx, kT, timestep, seed),
    )
    cuda.synchronize()
