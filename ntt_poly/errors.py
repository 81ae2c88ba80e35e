"""Exceptions raised by the polynomial engine.

Each one subclasses the builtin a caller would already expect, so code that
catches ZeroDivisionError or ValueError keeps working.
"""


class DivisionByZero(ZeroDivisionError):
    """Inversion or division by a zero field element, or by a series/polynomial
    whose required coefficient is zero."""


class InvalidPrecondition(ValueError):
    """An operation was called outside its domain (bad transform length,
    nonzero constant term for exp, negative precision, ...)."""


class UnsupportedModulus(ValueError):
    """Fatal configuration error: the modulus cannot back an NTT of the
    requested size."""
