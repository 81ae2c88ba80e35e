"""NTT-friendly prime field GF(p) on top of the galois library.

FF is the default field, p = 998244353 = 119 * 2^23 + 1. Field elements are
0-d galois FieldArrays and coefficient vectors are 1-d FieldArrays, so every
product is reduced by galois in a wide enough representation.

The transform and polynomial layers take the field class as a parameter. Other
NTT-friendly primes are set up with make_field(FieldConfig(prime=...)).
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Type, Union

import galois
import numpy as np

from ntt_poly.errors import DivisionByZero, UnsupportedModulus

# --- Moduli ---

DEFAULT_PRIME = 998244353

# Largest transform length is 2^DEFAULT_MAX_LOG_SIZE unless configured otherwise.
# The bit-reversal table has this many entries, so keep it modest.
DEFAULT_MAX_LOG_SIZE = 20

KNOWN_PRIMITIVE_ROOTS: Dict[int, int] = {
    998244353: 3,  # 119 * 2^23 + 1
    469762049: 3,  # 7 * 2^26 + 1
    167772161: 3,  # 5 * 2^25 + 1
    7340033: 3,  # 7 * 2^20 + 1
}

Scalar = Union[int, np.integer, galois.FieldArray]


def two_adicity(prime: int) -> int:
    """Return the largest k such that 2^k divides prime - 1."""
    m = prime - 1
    return (m & -m).bit_length() - 1


# --- Configuration ---

@dataclass(frozen=True)
class FieldConfig:
    """Field and transform size configuration.

    Fixed once the field is created: the root cache is sized and keyed to it.
    """
    prime: int = DEFAULT_PRIME
    max_log_size: Optional[int] = None  # K, transforms up to length 2^K
    primitive_root: Optional[int] = None  # generator of GF(p)^*

    def resolved(self) -> "FieldConfig":
        """Return a copy with every optional field filled in and validated.

        Raises:
            UnsupportedModulus: If the prime cannot back the configured NTT.
        """
        p = self.prime
        if p < 3 or not galois.is_prime(p):
            raise UnsupportedModulus(f"Modulus {p} is not an odd prime")

        adicity = two_adicity(p)
        k = self.max_log_size
        if k is None:
            k = min(adicity, DEFAULT_MAX_LOG_SIZE)
        if k < 1 or k > adicity:
            raise UnsupportedModulus(
                f"Transform length 2^{k} does not divide p - 1 for p = {p} (2-adicity {adicity})"
            )

        g = self.primitive_root
        if g is None:
            g = KNOWN_PRIMITIVE_ROOTS.get(p)
        if g is None:
            try:
                g = int(galois.primitive_root(p))
            except (ValueError, RuntimeError) as exc:
                raise UnsupportedModulus(f"Cannot compute a primitive root of {p}") from exc
        elif not galois.is_primitive_root(g, p):
            raise UnsupportedModulus(f"{g} is not a primitive root of {p}")

        return replace(self, max_log_size=k, primitive_root=g)


_CONFIGS: Dict[int, FieldConfig] = {}


def make_field(config: FieldConfig) -> Type[galois.FieldArray]:
    """Validate config, register it for its prime and return the field class.

    A prime can be configured only once. Asking again with the same
    configuration returns the same class.
    """
    resolved = config.resolved()
    existing = _CONFIGS.get(resolved.prime)
    if existing is not None and existing != resolved:
        raise UnsupportedModulus(
            f"Prime {resolved.prime} is already configured as {existing}"
        )
    _CONFIGS[resolved.prime] = resolved
    return galois.GF(resolved.prime)


def field_config(field: Type[galois.FieldArray]) -> FieldConfig:
    """Return the registered configuration of a prime field class."""
    if field.degree != 1:
        raise UnsupportedModulus(f"{field.name} is not a prime field")
    config = _CONFIGS.get(field.order)
    if config is None:
        config = FieldConfig(prime=field.order).resolved()
        _CONFIGS[field.order] = config
    return config


DEFAULT_CONFIG = FieldConfig()

FF = make_field(DEFAULT_CONFIG)
"""Default field GF(998244353)."""


# --- Conversion ---

def element(value: Scalar, field: Type[galois.FieldArray] = FF) -> galois.FieldArray:
    """Reduce any integer (negative or wider than p) into a field element."""
    return field(int(value) % field.order)


def to_field(values: Iterable[Scalar], field: Type[galois.FieldArray] = FF) -> galois.FieldArray:
    """Reduce a sequence of integers or field elements into a 1-d field array."""
    if isinstance(values, field):
        return values.reshape(-1).copy()
    p = field.order
    reduced = [int(v) % p for v in values]
    if not reduced:
        return field.Zeros(0)
    return field(reduced)


# --- Scalar Arithmetic ---

def inverse(a: galois.FieldArray) -> galois.FieldArray:
    """Multiplicative inverse, computed by galois as a ** -1.

    Raises:
        DivisionByZero: If a is zero.
    """
    if int(a) == 0:
        raise DivisionByZero(f"Cannot invert zero in GF({type(a).order})")
    return a ** -1


def power(a: galois.FieldArray, exponent: int) -> galois.FieldArray:
    """a^exponent by square-and-multiply. Negative exponents invert first."""
    field = type(a)
    if int(a) == 0:
        if exponent < 0:
            raise DivisionByZero(f"Cannot raise zero to a negative power in GF({field.order})")
        return field(1) if exponent == 0 else field(0)
    if exponent < 0:
        return power(inverse(a), -exponent)
    # a^(p-1) = 1 for nonzero a
    return a ** (exponent % (field.order - 1))


def batch_inverse(values: galois.FieldArray) -> galois.FieldArray:
    """Montgomery batch inversion of a 1-d field array.

    Converts N field inversions into 3N-3 multiplications + 1 inversion:
    1. Forward pass: prefix products cumprods[i] = a[0] * ... * a[i]
    2. Single inversion of cumprods[N-1]
    3. Backward pass: peel off individual inverses

    Raises:
        DivisionByZero: If any element is zero.
    """
    n = len(values)
    field = type(values)
    if n == 0:
        return field.Zeros(0)
    if np.count_nonzero(values) != n:
        raise DivisionByZero(f"Cannot batch-invert a vector containing zero in GF({field.order})")
    if n == 1:
        return values ** -1

    cumprods = field.Zeros(n)
    cumprods[0] = values[0]
    for i in range(1, n):
        cumprods[i] = cumprods[i - 1] * values[i]

    z = cumprods[n - 1] ** -1

    results = field.Zeros(n)
    for i in range(n - 1, 0, -1):
        results[i] = z * cumprods[i - 1]
        z = z * values[i]
    results[0] = z

    return results
