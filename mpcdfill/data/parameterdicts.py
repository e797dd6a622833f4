# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Validated mappings of operation parameters."""

from collections.abc import MutableMapping

from mpcdfill.data.typeconverter import TypeConverter, to_type_converter
from mpcdfill.error import TypeConversionError


class _RequiredArg:
    """Marker for a parameter that has no value yet."""

    def __repr__(self):
        return "RequiredArg"


RequiredArg = _RequiredArg()


class ParameterDict(MutableMapping):
    """Mapping of parameters with type validation.

    Each keyword argument declares one parameter. A class or `TypeConverter`
    declares a required parameter with that validator. Any other value is the
    default of the parameter and its type is the validator.

    .. code-block:: python

        param_dict = ParameterDict(density=float(density), kT=Variant)
        param_dict["kT"] = kT
    """

    def __init__(self, **kwargs):
        self._type_converter = {}
        self._dict = {}
        for key, value in kwargs.items():
            if isinstance(value, (TypeConverter, type)):
                self._type_converter[key] = to_type_converter(value)
                self._dict[key] = RequiredArg
            else:
                self._type_converter[key] = to_type_converter(value)
                self._dict[key] = value

    def __getitem__(self, key):
        value = self._dict[key]
        if value is RequiredArg:
            raise ValueError(f"The parameter {key} has not been set.")
        return value

    def __setitem__(self, key, value):
        if key not in self._type_converter:
            self._type_converter[key] = to_type_converter(value)
        try:
            self._dict[key] = self._type_converter[key](value)
        except TypeConversionError as err:
            raise TypeConversionError(f"Error setting {key}: {err}") from err

    def __delitem__(self, key):
        del self._dict[key]
        del self._type_converter[key]

    def __iter__(self):
        yield from self._dict

    def __len__(self):
        return len(self._dict)

    def update(self, other):
        """Add the parameters and validators of another mapping."""
        if isinstance(other, ParameterDict):
            self._type_converter.update(other._type_converter)
            self._dict.update(other._dict)
        else:
            for key, value in other.items():
                self[key] = value

    def _set_raw(self, key, value):
        """Store a value that is already validated."""
        self._dict[key] = value

    def to_base(self):
        """Return a plain dictionary of the parameters."""
        return dict(self._dict)

    def __eq__(self, other):
        if not isinstance(other, ParameterDict):
            return NotImplemented
        return self._dict == other._dict

    def __repr__(self):
        return "ParameterDict({})".format(self._dict)
