"""Factorial tables and the counting functions built on them.

Tables grow on demand (capacity doubles), so no init call is needed.
"""

from typing import Optional, Type

import galois

from ntt_poly.errors import InvalidPrecondition
from ntt_poly.field import FF, batch_inverse, power


class Combinatorics:
    """Factorials, inverse factorials and inverses of 1..n over a prime field."""

    def __init__(self, field: Type[galois.FieldArray] = FF) -> None:
        self.field = field
        self._fact = field([1, 1])
        self._inv_fact = field([1, 1])
        self._inv = field([0, 1])

    def _grow(self, n: int) -> None:
        size = self._fact.size
        if n < size:
            return
        if n >= self.field.order:
            raise InvalidPrecondition(f"{n}! vanishes in GF({self.field.order})")
        new_size = min(max(n + 1, 2 * size), self.field.order)

        fact = self.field.Zeros(new_size)
        fact[:size] = self._fact
        for i in range(size, new_size):
            fact[i] = fact[i - 1] * self.field(i)

        inv_fact = batch_inverse(fact)
        inv = self.field.Zeros(new_size)
        # 1/i = (i-1)! / i!
        inv[1:] = inv_fact[1:] * fact[:-1]

        self._fact, self._inv_fact, self._inv = fact, inv_fact, inv

    def factorial(self, n: int) -> galois.FieldArray:
        self._grow(n)
        return self._fact[n]

    def inverse_factorial(self, n: int) -> galois.FieldArray:
        self._grow(n)
        return self._inv_fact[n]

    def inverse_of(self, n: int) -> galois.FieldArray:
        """1/n for 1 <= n < p."""
        if n <= 0:
            raise InvalidPrecondition(f"No table inverse for {n}")
        self._grow(n)
        return self._inv[n]

    def choose(self, n: int, k: int) -> galois.FieldArray:
        """Binomial coefficient, zero unless 0 <= k <= n."""
        if n < k or n < 0 or k < 0:
            return self.field(0)
        return self.factorial(n) * self.inverse_factorial(k) * self.inverse_factorial(n - k)

    def catalan(self, n: int, k: Optional[int] = None) -> galois.FieldArray:
        """Bracket sequences with n opening and k closing brackets (every
        prefix has at least as many opening ones). catalan(n) = C_n."""
        if k is None:
            k = n
        if k > n or k < 0:
            return self.field(0)
        return self.choose(n + k, k) - self.choose(n + k, k - 1)

    def stirling2(self, n: int, k: int) -> galois.FieldArray:
        """Partitions of n distinct elements into exactly k non-empty groups."""
        if n < 0 or k < 0:
            return self.field(0)
        res = self.field(0)
        for j in range(k + 1):
            term = self.choose(k, j) * power(self.field(j), n)
            if (k - j) % 2:
                res = res - term
            else:
                res = res + term
        return res * self.inverse_factorial(k)
