# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Access MPCD particle data directly."""

from abc import ABC, abstractmethod

from mpcdfill.box import Box
from mpcdfill.error import DataAccessError


class _LocalAccess(ABC):
    __slots__ = ("_accessed_fields", "_cpp_obj", "_entered")
    _read_only_fields = frozenset()

    @property
    @abstractmethod
    def _fields(self):
        pass

    def __init__(self):
        self._entered = False
        self._accessed_fields = dict()

    def __getattr__(self, attr):
        if attr in self._accessed_fields:
            return self._accessed_fields[attr]

        raw_attr, flag = self._get_raw_attr_and_flag(attr)
        if raw_attr not in self._fields:
            raise AttributeError(
                "{} object has no attribute {}".format(type(self), attr)
            )
        if not self._entered:
            raise DataAccessError(attr)

        arr = getattr(self._cpp_obj, self._fields[raw_attr])(flag)
        if raw_attr in self._read_only_fields:
            arr = arr.view()
            arr.flags.writeable = False
        self._accessed_fields[attr] = arr
        return arr

    def _get_raw_attr_and_flag(self, attr):
        virtual_only = attr.startswith("virtual_")
        with_virtual = attr.endswith("_with_virtual")
        raw_attr = attr.replace("_with_virtual", "").replace("virtual_", "")
        if virtual_only and with_virtual:
            raise ValueError(
                "Attribute cannot be both prefixed with virtual_ "
                "and suffixed with _with_virtual"
            )
        elif virtual_only:
            return raw_attr, "virtual"
        elif with_virtual:
            return raw_attr, "both"
        else:
            return raw_attr, "standard"

    def __setattr__(self, attr, value):
        if attr in self.__slots__:
            super().__setattr__(attr, value)
            return
        try:
            arr = getattr(self, attr)
        except AttributeError:
            raise AttributeError(
                "{} object has no attribute {}.".format(self.__class__, attr)
            )
        else:
            if not arr.flags.writeable:
                raise RuntimeError("Attribute {} is not settable.".format(attr))
            arr[:] = value

    def _enter(self):
        self._entered = True

    def _exit(self):
        self._entered = False
        self._accessed_fields = dict()


class MPCDParticleLocalAccess(_LocalAccess):
    """Directly access MPCD particle data in the state.

    Prefix an attribute with ``virtual_`` to access only the virtual particles
    or suffix it with ``_with_virtual`` to access the real particles followed
    by the virtual particles.

    Note:
        The arrays are views of the particle data. They are only valid inside
        the context manager that created them.

    Attributes:
        position ((N_particles, 3) `numpy.ndarray` of ``float``):
            Particle positions :math:`[\\mathrm{length}]`.
        velocity ((N_particles, 3) `numpy.ndarray` of ``float``):
            Particle velocities :math:`[\\mathrm{velocity}]`.
        typeid ((N_particles) `numpy.ndarray` of ``float``):
            The integer type of a particle, stored as a ``float``.
        cell ((N_particles) `numpy.ndarray` of ``float``):
            The collision cell of a particle, stored as a ``float``. Freshly
            filled virtual particles have the cell
            `mpcdfill.data.particle_data.NO_CELL`.
        tag ((N_particles) `numpy.ndarray` of ``int``):
            The particle tags (*read only*).
    """

    _fields = {
        "position": "get_position",
        "typeid": "get_typeid",
        "velocity": "get_velocity",
        "cell": "get_cell",
        "tag": "get_tag",
    }
    _read_only_fields = frozenset({"tag"})

    def __init__(self, state):
        super().__init__()
        self._cpp_obj = state._mpcd_data


class _LocalSnapshot:
    """Context manager giving access to the MPCD particle arrays.

    .. rubric:: Example:

    .. code-block:: python

        with state.cpu_local_snapshot as snap:
            velocity = snap.mpcd.virtual_velocity
    """

    def __init__(self, state):
        self._state = state
        self._box = state.box
        self._mpcd = MPCDParticleLocalAccess(state)

    @property
    def global_box(self):
        """mpcdfill.Box: The global simulation box."""
        return Box.from_box(self._box)

    @property
    def mpcd(self):
        """mpcdfill.data.MPCDParticleLocalAccess: Local MPCD particle data."""
        return self._mpcd

    def __enter__(self):
        self._state._in_context_manager = True
        self._mpcd._enter()
        return self

    def __exit__(self, type, value, traceback):
        self._state._in_context_manager = False
        self._mpcd._exit()
