"""Polynomial division and Bostan–Mori coefficient extraction."""

from typing import Iterable, Tuple, Type

import galois

from ntt_poly.errors import DivisionByZero, InvalidPrecondition
from ntt_poly.field import FF, Scalar, inverse as field_inverse, to_field
from ntt_poly.polynomial import Polynomial, multiply
from ntt_poly.series import inverse

# --- Long Division ---

def divide(a: Polynomial, b: Polynomial) -> Polynomial:
    """Quotient of a by b.

    With da = deg(a), db = deg(b) and k = da - db + 1, the reversed quotient is
    rev(a) * rev(b)^-1 mod x^k. When deg(a) < deg(b) the quotient is the zero
    polynomial [0]; that is a result, not an error.

    Raises:
        DivisionByZero: If b is the zero polynomial.
    """
    a._check_field(b)
    db = b.degree
    if db < 0:
        raise DivisionByZero("Polynomial division by the zero polynomial")
    da = a.degree
    if da < db:
        return Polynomial.zeros(1, a.field)

    k = da - db + 1
    rev_a = a.truncated(da + 1).reversed().truncated(k)
    rev_b = b.truncated(db + 1).reversed()
    return multiply(rev_a, inverse(rev_b, k)).truncated(k).reversed()


def divmod_poly(a: Polynomial, b: Polynomial) -> Tuple[Polynomial, Polynomial]:
    """(q, r) with a = b * q + r and r of size max(deg(b), 1)."""
    q = divide(a, b)
    r = (a - multiply(b, q)).truncated(max(b.degree, 1))
    return q, r


def remainder(a: Polynomial, b: Polynomial) -> Polynomial:
    return divmod_poly(a, b)[1]


# --- Bostan–Mori ---

def bostan_mori(p: Polynomial, q: Polynomial, n: int) -> galois.FieldArray:
    """[x^n] P(x) / Q(x) in O(d log d log n) for d = |Q|.

    With U(x) = P(x) Q(-x) and V(x^2) = Q(x) Q(-x):
        [x^n] P / Q = [x^(n // 2)] U_(n mod 2) / V
    where U_0 / U_1 are the even / odd coefficients of U.

    Raises:
        DivisionByZero: If Q[0] is zero.
        InvalidPrecondition: If n is negative.
    """
    if n < 0:
        raise InvalidPrecondition(f"Coefficient index must be non-negative, got {n}")
    p._check_field(q)
    if int(q.coefficient(0)) == 0:
        raise DivisionByZero("Bostan-Mori needs Q(0) != 0")

    while n > 0:
        q_neg = q.copy()
        q_neg.coeffs[1::2] = -q_neg.coeffs[1::2]
        u = multiply(p, q_neg)
        v = multiply(q, q_neg)
        p = u[n & 1 :: 2]
        q = v[::2]
        n >>= 1

    return p.coefficient(0) * field_inverse(q.coefficient(0))


def linear_recurrence_nth(
    coefficients: Iterable[Scalar],
    seeds: Iterable[Scalar],
    n: int,
    field: Type[galois.FieldArray] = FF,
) -> galois.FieldArray:
    """a_n for a_i = c_1 a_(i-1) + ... + c_d a_(i-d), given a_0 .. a_(d-1).

    The generating function of a is P / Q with Q = 1 - c_1 x - ... - c_d x^d
    and P = (a_0 + ... + a_(d-1) x^(d-1)) * Q mod x^d.
    """
    c = to_field(coefficients, field)
    a = to_field(seeds, field)
    d = c.size
    if a.size != d:
        raise InvalidPrecondition(f"Expected {d} seed terms, got {a.size}")

    q = field.Zeros(d + 1)
    q[0] = 1
    q[1:] = -c
    denominator = Polynomial(q)
    numerator = multiply(Polynomial(a), denominator).truncated(d)
    return bostan_mori(numerator, denominator, n)
