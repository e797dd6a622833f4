# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Simulation box."""

import numpy as np


class Box:
    """Define an orthorhombic simulation box.

    Args:
        Lx (float): box extent in the x direction :math:`[\\mathrm{length}]`.
        Ly (float): box extent in the y direction :math:`[\\mathrm{length}]`.
        Lz (float): box extent in the z direction :math:`[\\mathrm{length}]`.

    The box is centered on the origin and periodic in every direction. Its
    lower corner is :math:`-\\vec{L}/2` and its upper corner is
    :math:`+\\vec{L}/2`.

    Note:
        Virtual particle filling does not support triclinic boxes, so `Box`
        has no tilt factors.

    .. rubric:: Example:

    .. code-block:: python

        box = mpcdfill.Box(Lx=20, Ly=20, Lz=10)
    """

    def __init__(self, Lx, Ly, Lz):
        self._L = np.array([Lx, Ly, Lz], dtype=np.float64)
        if np.any(self._L <= 0):
            raise ValueError(f"Box lengths must be positive, got {self._L}.")

    @classmethod
    def cube(cls, L):
        """Create a cubic box with a given side length.

        Args:
            L (float): The box side length :math:`[\\mathrm{length}]`.

        Returns:
            mpcdfill.Box: The created cubic box.
        """
        return cls(L, L, L)

    @classmethod
    def from_box(cls, box):
        """Initialize a Box instance from a box-like object.

        Args:
            box: A `Box` or a sequence ``[Lx, Ly, Lz]``.

        Returns:
            mpcdfill.Box: The resulting box object.
        """
        if isinstance(box, Box):
            return cls(*box.L)
        Lx, Ly, Lz = box
        return cls(Lx, Ly, Lz)

    @property
    def L(self):
        """(3, ) `numpy.ndarray` of ``float``: The box lengths \
        :math:`[\\mathrm{length}]`."""
        return self._L.copy()

    @property
    def Lx(self):
        """float: The length of the box in the x dimension."""
        return float(self._L[0])

    @property
    def Ly(self):
        """float: The length of the box in the y dimension."""
        return float(self._L[1])

    @property
    def Lz(self):
        """float: The length of the box in the z dimension."""
        return float(self._L[2])

    @property
    def lo(self):
        """(3, ) `numpy.ndarray` of ``float``: Lower corner of the box."""
        return -0.5 * self._L

    @property
    def hi(self):
        """(3, ) `numpy.ndarray` of ``float``: Upper corner of the box."""
        return 0.5 * self._L

    @property
    def volume(self):
        """float: Volume of the box :math:`[\\mathrm{length}^3]`."""
        return float(np.prod(self._L))

    def __eq__(self, other):
        if not isinstance(other, Box):
            return NotImplemented
        return np.array_equal(self._L, other._L)

    def __repr__(self):
        return "mpcdfill.box.Box(Lx={}, Ly={}, Lz={})".format(*self._L)
