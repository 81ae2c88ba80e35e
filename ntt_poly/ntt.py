"""Number Theoretic Transform over an NTT-friendly prime field."""

import threading
from typing import Dict, Type

import galois
import numpy as np

from ntt_poly.errors import InvalidPrecondition
from ntt_poly.field import FF, FieldConfig, field_config

# --- Root Cache ---

class RootCache:
    """Roots of unity and bit-reversal table for transforms up to length 2^K.

    One table of 2^(K-1) successive powers of a principal 2^K-th root of unity
    omega backs every transform length: the roots for length L are the powers
    of omega_L = omega^(2^K / L), i.e. a strided view of that table.

    Built once per field by get_root_cache() and read-only afterwards.
    """

    def __init__(self, field: Type[galois.FieldArray], config: FieldConfig) -> None:
        self.field = field
        self.max_log_size = config.max_log_size
        self.max_size = 1 << self.max_log_size

        g = field(config.primitive_root)
        self.omega = g ** ((field.order - 1) >> self.max_log_size)

        self._powers = _precompute_powers(self.omega, self.max_size >> 1)
        self._powers.flags.writeable = False

        self._bit_reversal = _precompute_bit_reversal(self.max_log_size)
        self._bit_reversal.flags.writeable = False

    def roots(self, length: int) -> galois.FieldArray:
        """Return [1, w, w^2, ..., w^(length/2 - 1)] for a principal length-th root w."""
        return self._powers[:: self.max_size // length]

    def bit_reversal(self, size: int) -> np.ndarray:
        """Return the bit-reversal permutation of range(size), size = 2^m <= 2^K."""
        shift = self.max_log_size - (size.bit_length() - 1)
        return self._bit_reversal[:size] >> shift

    def check_size(self, size: int) -> int:
        """Return log2(size), or raise InvalidPrecondition if size is not a supported length."""
        if size <= 0 or size & (size - 1):
            raise InvalidPrecondition(f"Transform length must be a power of 2, got {size}")
        if size > self.max_size:
            raise InvalidPrecondition(
                f"Transform length {size} exceeds the configured maximum 2^{self.max_log_size}"
            )
        return size.bit_length() - 1


_CACHES: Dict[int, RootCache] = {}
_CACHE_LOCK = threading.Lock()


def get_root_cache(field: Type[galois.FieldArray] = FF) -> RootCache:
    """Return the root cache of field, building it on first use."""
    cache = _CACHES.get(field.order)
    if cache is None:
        with _CACHE_LOCK:
            cache = _CACHES.get(field.order)
            if cache is None:
                cache = RootCache(field, field_config(field))
                _CACHES[field.order] = cache
    return cache


# --- Transform ---

def ntt(buffer: galois.FieldArray, inverse: bool = False) -> galois.FieldArray:
    """Transform buffer in place and return it.

    The forward transform maps coefficients to evaluations at the powers of a
    principal len(buffer)-th root of unity. The inverse reverses buffer[1:]
    before the same butterfly network and scales by 1/len(buffer).

    Raises:
        InvalidPrecondition: If len(buffer) is not a power of 2 or exceeds 2^K.
    """
    field = type(buffer)
    cache = get_root_cache(field)
    n = buffer.size
    n_bits = cache.check_size(n)

    if inverse:
        a = field.Zeros(n)
        a[0] = buffer[0]
        a[1:] = buffer[:0:-1]
        a = a[cache.bit_reversal(n)]
    else:
        a = buffer[cache.bit_reversal(n)]

    for layer in range(1, n_bits + 1):
        length = 1 << layer
        half = length >> 1
        blocks = a.reshape(-1, length)
        u = blocks[:, :half]
        v = blocks[:, half:] * cache.roots(length)
        upper = u + v
        lower = u - v
        blocks[:, :half] = upper
        blocks[:, half:] = lower

    if inverse:
        a = a * (field(n) ** -1)

    buffer[:] = a
    return buffer


def intt(buffer: galois.FieldArray) -> galois.FieldArray:
    """Inverse transform in place: evaluations -> coefficients."""
    return ntt(buffer, inverse=True)


# --- Helpers ---

def next_power_of_two(n: int) -> int:
    """Smallest power of 2 that is >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def _precompute_powers(omega: galois.FieldArray, count: int) -> galois.FieldArray:
    """powers[k] = omega^k for k < count (count a power of 2), by repeated doubling."""
    field = type(omega)
    powers = field.Ones(1)
    step = omega
    while powers.size < count:
        size = powers.size
        doubled = field.Zeros(2 * size)
        doubled[:size] = powers
        doubled[size:] = powers * step
        powers = doubled
        step = step * step
    return powers


def _precompute_bit_reversal(n_bits: int) -> np.ndarray:
    """rev[i] = i with its n_bits low bits reversed."""
    idx = np.arange(1 << n_bits, dtype=np.int64)
    rev = np.zeros_like(idx)
    for b in range(n_bits):
        rev |= ((idx >> b) & 1) << (n_bits - 1 - b)
    return rev
