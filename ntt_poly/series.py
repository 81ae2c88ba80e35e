"""Formal power series operations.

Every function returns exactly n coefficients, i.e. the result is only correct
modulo x^n. Inverse and exp use Newton doubling: each round doubles the number
of correct coefficients, so log2(n) rounds of polynomial multiplication reach
precision n.
"""

import numpy as np

from ntt_poly.errors import DivisionByZero, InvalidPrecondition
from ntt_poly.field import power
from ntt_poly.polynomial import Polynomial, multiply


def _check_precision(n: int) -> None:
    if n < 1:
        raise InvalidPrecondition(f"Series precision must be at least 1, got {n}")


def inverse(p: Polynomial, n: int) -> Polynomial:
    """Q with P * Q = 1 mod x^n.

    Newton step at precision m: Q <- Q * (2 - P * Q) mod x^(2m), using only
    the prefix P[0:2m].

    Raises:
        DivisionByZero: If P[0] is zero.
    """
    _check_precision(n)
    field = p.field
    c0 = p.coefficient(0)
    if int(c0) == 0:
        raise DivisionByZero("Series inverse needs a nonzero constant term")

    q = Polynomial([c0 ** -1], field)
    m = 1
    while m < n:
        m <<= 1
        correction = -multiply(p.truncated(m), q).truncated(m)
        correction[0] = correction[0] + field(2)
        q = multiply(q, correction).truncated(m)
    return q.truncated(n)


def derivative(p: Polynomial) -> Polynomial:
    """P'(x): d[i] = (i + 1) * P[i + 1]."""
    field = p.field
    n = p.size
    if n <= 1:
        return Polynomial(field.Zeros(0))
    return Polynomial(p.coeffs[1:] * field(np.arange(1, n).tolist()))


def integral(p: Polynomial) -> Polynomial:
    """Antiderivative with zero constant term: I[i + 1] = P[i] / (i + 1)."""
    field = p.field
    n = p.size
    out = field.Zeros(n + 1)
    if n:
        out[1:] = p.coeffs / field(np.arange(1, n + 1).tolist())
    return Polynomial(out)


def log(p: Polynomial, n: int) -> Polynomial:
    """ln P mod x^n, from (ln P)' = P' / P.

    Raises:
        DivisionByZero: If P[0] is zero.
    """
    _check_precision(n)
    if int(p.coefficient(0)) == 0:
        raise DivisionByZero("Series logarithm needs a nonzero constant term")
    head = p.truncated(n)
    quotient = multiply(derivative(head), inverse(head, n)).truncated(n - 1)
    return integral(quotient)


def exp(p: Polynomial, n: int) -> Polynomial:
    """e^P mod x^n.

    Newton step at precision m: Q <- Q * (1 + P - ln Q) mod x^(2m).

    Raises:
        InvalidPrecondition: If P[0] is not zero.
    """
    _check_precision(n)
    field = p.field
    if int(p.coefficient(0)) != 0:
        raise InvalidPrecondition("Series exponential needs a zero constant term")

    q = Polynomial(field.Ones(1))
    m = 1
    while m < n:
        m <<= 1
        step = p.truncated(m) - log(q, m)
        step[0] = step[0] + field(1)
        q = multiply(q, step).truncated(m)
    return q.truncated(n)


def modpow(p: Polynomial, exponent: int, n: int) -> Polynomial:
    """P^exponent mod x^n for exponent >= 0.

    Writes P = c * x^s * R with R[0] = 1, so that
    P^k = c^k * x^(s*k) * exp(k * ln R).
    """
    _check_precision(n)
    if exponent < 0:
        raise InvalidPrecondition(f"Series power needs a non-negative exponent, got {exponent}")
    field = p.field
    if exponent == 0:
        return Polynomial.monomial(0, 1, field).truncated(n)

    nonzero = np.flatnonzero(p.coeffs)
    if nonzero.size == 0:
        return Polynomial.zeros(n, field)
    s = int(nonzero[0])
    shift = s * exponent
    if shift >= n:
        return Polynomial.zeros(n, field)

    size = n - shift
    c = p.coeffs[s]
    unit = p.shifted(-s) / c
    # k enters as a field element: R^p = 1 mod x^size because size <= 2^K < p
    powered = exp(log(unit, size) * exponent, size) * power(c, exponent)
    return powered.shifted(shift).truncated(n)
