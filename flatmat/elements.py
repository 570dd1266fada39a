# flatmat/elements.py
"""
ELEMENT TYPES: What a Matrix Cell Can Hold
==========================================

PURPOSE:
--------
The Matrix container is generic over its element type. Different operations
need different capabilities from that type:

    Matrix.new / default    ->  zero()     the default value
    Matrix.set_identity     ->  one()      the multiplicative identity
    Matrix.random           ->  sample()   one uniform draw
    read_matrix             ->  parse()    text field -> value

ElementType wraps a numpy dtype and provides exactly these four accessors.
Everything else (arithmetic, formatting) is numpy's business.

SUPPORTED DTYPES:
-----------------
- bool
- signed / unsigned integers (int8 ... uint64)
- floats (float16, float32, float64, ...)
- complex

Object, string and datetime dtypes are rejected: they have no meaningful
"one" or uniform distribution.

RANDOM SAMPLING:
----------------
"Uniform over the element type's domain" means:
- integers: every representable value equally likely (iinfo.min..iinfo.max)
- floats:   [0, 1), the usual convention for uniform floats
- complex:  independent [0, 1) real and imaginary parts
- bool:     fair coin
"""

import operator
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from .kernel.errors import ElementCastError, FieldParseError


_TRUE_TEXT = {"true", "1"}
_FALSE_TEXT = {"false", "0"}


@dataclass(frozen=True)
class ElementType:
    """
    Capability accessors for one numpy scalar dtype.

    Attributes:
    -----------
    dtype : np.dtype
        The numpy dtype of every element in the matrix buffer

    Examples:
    ---------
    >>> et = ElementType(np.dtype("int32"))
    >>> et.zero(), et.one()
    (0, 1)
    >>> et.parse(" 42 ")
    42
    """
    dtype: np.dtype

    def __post_init__(self):
        dtype = np.dtype(self.dtype)
        if dtype.kind not in "biufc":
            raise TypeError(
                f"Unsupported element dtype {dtype}: need bool, integer, float or complex"
            )
        object.__setattr__(self, "dtype", dtype)

    @property
    def kind(self) -> str:
        return self.dtype.kind

    def cast(self, value: Any):
        """
        Convert a value to this dtype's scalar type, refusing lossy conversions.

        Bool and integer dtypes need the exact value: 2.0 -> int32 is fine,
        2.5 -> int32 and 300 -> uint8 are errors. Float and complex dtypes
        round to their precision but must not overflow to inf, and float
        dtypes reject a nonzero imaginary part.

        Raises:
        -------
        ElementCastError
            If the value would be truncated, wrapped or otherwise changed
        """
        if isinstance(value, (str, bytes)):
            raise ElementCastError(
                f"Cannot store text {value!r} in a {self.dtype} matrix (parse it first)"
            )

        kind = self.dtype.kind
        if kind != "c" and isinstance(value, (complex, np.complexfloating)):
            if value.imag != 0:
                raise ElementCastError(f"{value!r} has an imaginary part; {self.dtype} cannot hold it")
            value = value.real

        if kind in "biu":
            return self._cast_exact(value)

        try:
            converted = self.dtype.type(value)
            overflowed = bool(np.isfinite(value)) and not bool(np.isfinite(converted))
        except (OverflowError, ValueError, TypeError) as exc:
            raise ElementCastError(f"Cannot store {value!r} in a {self.dtype} matrix: {exc}") from exc
        if overflowed:
            raise ElementCastError(f"{value!r} overflows {self.dtype}")
        return converted

    def _cast_exact(self, value: Any):
        try:
            integral = operator.index(value)
        except TypeError:
            try:
                as_float = float(value)
            except (TypeError, ValueError) as exc:
                raise ElementCastError(
                    f"Cannot store {value!r} in a {self.dtype} matrix: {exc}"
                ) from exc
            if not as_float.is_integer():
                raise ElementCastError(f"{value!r} is not a whole number; {self.dtype} would truncate it")
            integral = int(as_float)

        if self.dtype.kind == "b":
            low, high = 0, 1
        else:
            info = np.iinfo(self.dtype)
            low, high = int(info.min), int(info.max)
        if integral < low or integral > high:
            raise ElementCastError(f"{value!r} is out of range for {self.dtype} [{low}, {high}]")
        return self.dtype.type(integral)

    def zero(self):
        """Default value (0, 0.0, 0j or False)."""
        return self.dtype.type(0)

    def one(self):
        """Multiplicative identity (1, 1.0, 1+0j or True)."""
        return self.dtype.type(1)

    def sample(self, rng: np.random.Generator):
        """
        Draw one value uniformly over this type's domain.

        Parameters:
        -----------
        rng : np.random.Generator
            Source of randomness, e.g. np.random.default_rng(seed)

        Returns:
        --------
        numpy scalar of self.dtype
        """
        kind = self.dtype.kind
        if kind == "b":
            return np.bool_(rng.integers(0, 2))
        if kind in "iu":
            info = np.iinfo(self.dtype)
            return rng.integers(info.min, info.max, endpoint=True, dtype=self.dtype)
        if kind == "f":
            if self.dtype in (np.dtype(np.float32), np.dtype(np.float64)):
                return self.dtype.type(rng.random(dtype=self.dtype))
            value = self.dtype.type(rng.random())
            # Rounding into a narrower float can land exactly on 1.0
            if value >= 1:
                value = np.nextafter(self.dtype.type(1), self.dtype.type(0))
            return value
        # complex
        return self.dtype.type(complex(rng.random(), rng.random()))

    def parse(self, text: str):
        """
        Convert one delimited-text field to this dtype.

        Surrounding whitespace is ignored. The value goes through cast(), so
        integers must fit the dtype (no wrap-around) and floats must not
        overflow; bools accept true/false/1/0 in any case.

        Raises:
        -------
        FieldParseError
            If the text is not a valid literal for this dtype
        """
        raw = text
        text = text.strip()
        kind = self.dtype.kind
        try:
            if kind == "b":
                lowered = text.lower()
                if lowered in _TRUE_TEXT:
                    return np.bool_(True)
                if lowered in _FALSE_TEXT:
                    return np.bool_(False)
                raise ValueError("not a boolean literal")
            if kind in "iu":
                return self.cast(int(text))
            if kind == "f":
                return self.cast(float(text))
            return self.cast(complex(text))
        except ValueError as exc:
            raise FieldParseError(
                f"Cannot parse {raw!r} as {self.dtype}: {exc}", text=raw
            ) from exc

    def __str__(self) -> str:
        return str(self.dtype)


def element_type(value: Union[ElementType, np.dtype, type, str]) -> ElementType:
    """
    Coerce a dtype-like (np.float64, "int32", np.dtype(...)) to an ElementType.

    An existing ElementType is returned unchanged.
    """
    if isinstance(value, ElementType):
        return value
    return ElementType(np.dtype(value))
