"""Polynomial container over a prime field and size-dispatched multiplication.

A Polynomial is an explicit-size coefficient vector: index i holds the
coefficient of x^i. Sizes are never trimmed behind the caller's back; trailing
zeros are kept, and operands of different sizes combine as if the shorter one
were zero-padded.
"""

from typing import Iterable, List, Optional, Tuple, Type, Union

import galois
import numpy as np

from ntt_poly.errors import InvalidPrecondition
from ntt_poly.field import FF, Scalar, element, inverse, to_field
from ntt_poly.ntt import next_power_of_two, ntt

# Below this operand size the O(n*m) loop beats padding + three transforms.
# A tuning value only; profile_multiply.py measures the crossover.
NAIVE_THRESHOLD = 60


def _is_scalar(value) -> bool:
    """True for ints and 0-d field elements; arrays are not scalars."""
    if isinstance(value, galois.FieldArray):
        return value.ndim == 0
    return isinstance(value, (int, np.integer))


class Polynomial:
    """Ordered coefficients [c0, c1, ..., c_{n-1}] of a polynomial over a prime field."""

    __slots__ = ("coeffs",)

    # Keep numpy from broadcasting FieldArray * Polynomial elementwise;
    # the reflected Polynomial operator runs instead.
    __array_ufunc__ = None

    def __init__(
        self,
        coeffs: Union[Iterable[Scalar], galois.FieldArray] = (),
        field: Optional[Type[galois.FieldArray]] = None,
    ) -> None:
        if field is None:
            field = type(coeffs) if isinstance(coeffs, galois.FieldArray) else FF
        self.coeffs = to_field(coeffs, field)

    # --- Construction ---

    @classmethod
    def zeros(cls, size: int, field: Type[galois.FieldArray] = FF) -> "Polynomial":
        return cls(field.Zeros(size))

    @classmethod
    def monomial(cls, degree: int, coefficient: Scalar = 1,
                 field: Type[galois.FieldArray] = FF) -> "Polynomial":
        """coefficient * x^degree, of size degree + 1."""
        coeffs = field.Zeros(degree + 1)
        coeffs[degree] = element(coefficient, field)
        return cls(coeffs)

    @classmethod
    def parse(cls, text: str, field: Type[galois.FieldArray] = FF) -> "Polynomial":
        """Read "<degree> c0 c1 ... c_degree" (whitespace separated)."""
        tokens = text.split()
        if not tokens:
            raise InvalidPrecondition("Empty polynomial text")
        degree = int(tokens[0])
        values = tokens[1:]
        if degree < 0 or len(values) != degree + 1:
            raise InvalidPrecondition(
                f"Expected {degree + 1} coefficients for degree {degree}, got {len(values)}"
            )
        return cls([int(v) for v in values], field)

    # --- Accessors ---

    @property
    def field(self) -> Type[galois.FieldArray]:
        return type(self.coeffs)

    @property
    def size(self) -> int:
        return self.coeffs.size

    def __len__(self) -> int:
        return self.coeffs.size

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Polynomial(self.coeffs[index])
        return self.coeffs[index]

    def __setitem__(self, index: int, value: Scalar) -> None:
        self.coeffs[index] = element(value, self.field)

    def __iter__(self):
        return iter(self.coeffs)

    def coefficient(self, index: int) -> galois.FieldArray:
        """Coefficient of x^index, zero past the end."""
        if 0 <= index < self.size:
            return self.coeffs[index]
        return self.field(0)

    def to_list(self) -> List[int]:
        return [int(c) for c in self.coeffs]

    @property
    def degree(self) -> int:
        """Index of the highest nonzero coefficient, -1 for the zero polynomial."""
        nonzero = np.flatnonzero(self.coeffs)
        return int(nonzero[-1]) if nonzero.size else -1

    def is_zero(self) -> bool:
        return self.degree < 0

    def copy(self) -> "Polynomial":
        return Polynomial(self.coeffs.copy())

    def resize(self, size: int) -> None:
        """Pad with zeros or cut, in place."""
        self.coeffs = self._resized(size)

    def truncated(self, size: int) -> "Polynomial":
        """Copy with exactly size coefficients (mod x^size, zero-padded)."""
        return Polynomial(self._resized(size))

    def _resized(self, size: int) -> galois.FieldArray:
        if size < 0:
            raise InvalidPrecondition(f"Polynomial size must be non-negative, got {size}")
        out = self.field.Zeros(size)
        keep = min(size, self.size)
        out[:keep] = self.coeffs[:keep]
        return out

    def reversed(self) -> "Polynomial":
        return Polynomial(self.coeffs[::-1].copy())

    def shifted(self, k: int) -> "Polynomial":
        """Multiply by x^k; a negative k drops the lowest -k coefficients."""
        if k >= 0:
            out = self.field.Zeros(self.size + k)
            out[k:] = self.coeffs
            return Polynomial(out)
        return Polynomial(self.coeffs[-k:].copy())

    def evaluate(self, x: Scalar) -> galois.FieldArray:
        """Value at x by Horner's rule."""
        x = element(x, self.field)
        result = self.field(0)
        for c in self.coeffs[::-1]:
            result = result * x + c
        return result

    # --- Arithmetic ---

    def _check_field(self, other: "Polynomial") -> None:
        if other.field.order != self.field.order:
            raise InvalidPrecondition(
                f"Cannot combine polynomials over GF({self.field.order}) and GF({other.field.order})"
            )

    def __add__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_field(other)
        res = self._resized(max(self.size, other.size))
        res[: other.size] = res[: other.size] + other.coeffs
        return Polynomial(res)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_field(other)
        res = self._resized(max(self.size, other.size))
        res[: other.size] = res[: other.size] - other.coeffs
        return Polynomial(res)

    def __neg__(self) -> "Polynomial":
        return Polynomial(-self.coeffs)

    def __mul__(self, other) -> "Polynomial":
        if isinstance(other, Polynomial):
            return multiply(self, other)
        if _is_scalar(other):
            return Polynomial(self.coeffs * element(other, self.field))
        return NotImplemented

    def __rmul__(self, other) -> "Polynomial":
        if _is_scalar(other):
            return Polynomial(self.coeffs * element(other, self.field))
        return NotImplemented

    def __truediv__(self, other) -> "Polynomial":
        if isinstance(other, Polynomial):
            from ntt_poly.division import divide
            return divide(self, other)
        if _is_scalar(other):
            return Polynomial(self.coeffs * inverse(element(other, self.field)))
        return NotImplemented

    def __mod__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        from ntt_poly.division import remainder
        return remainder(self, other)

    def __divmod__(self, other: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        if not isinstance(other, Polynomial):
            return NotImplemented
        from ntt_poly.division import divmod_poly
        return divmod_poly(self, other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        if other.field.order != self.field.order:
            return False
        size = max(self.size, other.size)
        return bool(np.array_equal(self._resized(size), other._resized(size)))

    __hash__ = None

    # --- Power Series ---

    def inverse(self, n: int) -> "Polynomial":
        from ntt_poly import series
        return series.inverse(self, n)

    def log(self, n: int) -> "Polynomial":
        from ntt_poly import series
        return series.log(self, n)

    def exp(self, n: int) -> "Polynomial":
        from ntt_poly import series
        return series.exp(self, n)

    def modpow(self, exponent: int, n: int) -> "Polynomial":
        from ntt_poly import series
        return series.modpow(self, exponent, n)

    def derivative(self) -> "Polynomial":
        from ntt_poly import series
        return series.derivative(self)

    def integral(self) -> "Polynomial":
        from ntt_poly import series
        return series.integral(self)

    # --- Formatting ---

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.to_list())

    def __repr__(self) -> str:
        return f"Polynomial({self.to_list()}, GF({self.field.order}))"


# --- Multiplication ---

def multiply(lhs: Polynomial, rhs: Polynomial) -> Polynomial:
    """Product of size |lhs| + |rhs| - 1.

    Small operands go through the schoolbook loop, larger ones through the NTT.
    Both paths return identical coefficients.
    """
    if min(lhs.size, rhs.size) < NAIVE_THRESHOLD:
        return naive_multiply(lhs, rhs)
    return ntt_multiply(lhs, rhs)


def naive_multiply(lhs: Polynomial, rhs: Polynomial) -> Polynomial:
    """O(n*m) convolution: one vectorized row update per coefficient of the shorter operand."""
    lhs._check_field(rhs)
    field = lhs.field
    if lhs.size == 0 or rhs.size == 0:
        return Polynomial(field.Zeros(0))
    if lhs.size > rhs.size:
        lhs, rhs = rhs, lhs
    m = rhs.size
    res = field.Zeros(lhs.size + m - 1)
    for i, c in enumerate(lhs.coeffs.tolist()):
        if c:
            res[i : i + m] = res[i : i + m] + field(c) * rhs.coeffs
    return Polynomial(res)


def ntt_multiply(lhs: Polynomial, rhs: Polynomial) -> Polynomial:
    """Convolution via zero-padding to a power of 2, NTT, pointwise product, inverse NTT."""
    lhs._check_field(rhs)
    field = lhs.field
    if lhs.size == 0 or rhs.size == 0:
        return Polynomial(field.Zeros(0))
    result_size = lhs.size + rhs.size - 1
    n = next_power_of_two(result_size)

    a = field.Zeros(n)
    a[: lhs.size] = lhs.coeffs
    ntt(a)
    if rhs is lhs:
        b = a
    else:
        b = field.Zeros(n)
        b[: rhs.size] = rhs.coeffs
        ntt(b)

    prod = a * b
    ntt(prod, inverse=True)
    return Polynomial(prod[:result_size].copy())
