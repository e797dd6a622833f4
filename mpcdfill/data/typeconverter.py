# Copyright (c) 2009-2025 The Regents of the University of Michigan.
# Part of HOOMD-blue, released under the BSD 3-Clause License.

"""Implement type conversion helpers for operation parameters."""

from abc import ABC, abstractmethod

from mpcdfill.error import TypeConversionError
from mpcdfill.variant import Constant, Variant


def positive_real(number):
    """Ensure that a value is positive."""
    try:
        float_number = float(number)
    except Exception as err:
        raise TypeConversionError(f"{number} not convertible to float.") from err
    if float_number <= 0:
        raise TypeConversionError(f"Expected a number greater than zero, got {number}")
    return float_number


def nonnegative_real(number):
    """Ensure that a value is not negative."""
    try:
        float_number = float(number)
    except Exception as err:
        raise TypeConversionError(f"{number} not convertible to float.") from err
    if float_number < 0:
        raise TypeConversionError(f"Expected a non-negative number, got {number}")
    return float_number


def variant_preprocessing(value):
    """Convert a `variant_like` value to a `Variant`."""
    if isinstance(value, Variant):
        return value
    try:
        return Constant(float(value))
    except (TypeError, ValueError) as err:
        raise TypeConversionError(
            f"Expected a Variant or a float, got {value!r}."
        ) from err


class TypeConverter(ABC):
    """Base class for TypeConverter's encodes structure and validation.

    Subclasses represent validating a different data structure. When called
    they are to attempt to validate and transform the inputs as given by the
    structure set up at initialization.
    """

    @abstractmethod
    def __call__(self, value):
        """Called when values are set."""
        pass


class OnlyTypes(TypeConverter):
    """Only allow values that are instances of type.

    Developers should consider the `collections.abc` module in using this type.
    In general `OnlyTypes(Sequence)` is more readable than the similar
    `OnlyIf(lambda x: hasattr(x, '__iter__'))`. If a sequence of types is
    provided and ``strict`` is ``False``, conversions will be attempted in the
    order of the ``types`` sequence.
    """

    def __init__(
        self, *types, strict=False, allow_none=False, preprocess=None, postprocess=None
    ):
        # Handle if a class is passed rather than an iterable of classes
        self.types = types
        self.strict = strict
        self.allow_none = allow_none
        self.preprocess = preprocess
        self.postprocess = postprocess

    def _convert(self, value):
        if self.allow_none and value is None:
            return value
        if isinstance(value, self.types):
            return value
        if self.strict:
            raise TypeConversionError(
                f"value {value} not instance of type in {self.types}."
            )
        for type_ in self.types:
            try:
                return type_(value)
            except Exception:
                continue
        raise TypeConversionError(
            f"value {value} not convertible into type in {self.types}."
        )

    def __call__(self, value):
        if self.preprocess is not None and not (self.allow_none and value is None):
            value = self.preprocess(value)
        value = self._convert(value)
        if self.postprocess is not None and value is not None:
            value = self.postprocess(value)
        return value

    def __str__(self):
        """str: String representation of the validator."""
        return f"OnlyTypes({', '.join(type_.__name__ for type_ in self.types)})"


def to_type_converter(value):
    """Convert a type declaration or default value to a `TypeConverter`.

    Args:
        value: A `TypeConverter`, a class, or a default value whose type is used.

    Returns:
        TypeConverter: The validator for the parameter.
    """
    if isinstance(value, TypeConverter):
        return value
    if value is Variant:
        return OnlyTypes(Variant, preprocess=variant_preprocessing)
    if isinstance(value, type):
        return OnlyTypes(value, strict=issubclass(value, bool))
    if isinstance(value, Variant):
        return OnlyTypes(Variant, preprocess=variant_preprocessing)
    return OnlyTypes(type(value), strict=isinstance(value, bool))
