# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""mpcdfill errors."""


class MutabilityError(AttributeError):
    """Raised when setting an attribute after a simulation has been run.

    Args:
        attribute_name (str): Name of the read-only attribute.
    """

    def __init__(self, attribute_name):
        self.attribute_name = attribute_name

    def __str__(self):
        """Returns the error message."""
        return (
            f"The attribute {self.attribute_name} is immutable after "
            "attachment."
        )


class DataAccessError(RuntimeError):
    """Raised when data is inaccessible until the object is attached.

    Args:
        data_name (str): Name of the inaccessible quantity.
    """

    def __init__(self, data_name):
        self.data_name = data_name

    def __str__(self):
        """Returns the error message."""
        return (
            f"The property {self.data_name} is unavailable until the object "
            "is attached."
        )


class TypeConversionError(ValueError):
    """Error when validating or converting a parameter's type."""

    pass


class GPUNotAvailableError(NotImplementedError):
    """Error for when a GPU specific feature was requested without a GPU."""

    pass


__all__ = [
    "DataAccessError",
    "GPUNotAvailableError",
    "MutabilityError",
    "TypeConversionError",
]
