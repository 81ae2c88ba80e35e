"""Tests for the formal power series layer."""

import pytest

from ntt_poly.errors import DivisionByZero, InvalidPrecondition
from ntt_poly.field import FF, inverse as field_inverse
from ntt_poly.polynomial import Polynomial
from ntt_poly.series import derivative, exp, integral, inverse, log, modpow

P = FF.order


def _one(n: int) -> Polynomial:
    return Polynomial.monomial(0, 1).truncated(n)


class TestInverse:
    """Series inverse mod x^n."""

    @pytest.mark.parametrize("size,n", [(1, 1), (3, 5), (10, 8), (64, 64), (40, 130), (200, 100)])
    def test_product_is_one(self, size: int, n: int, random_poly) -> None:
        """P * inverse(P, n) = 1 mod x^n."""
        p = random_poly(size, constant=7)
        q = inverse(p, n)
        assert q.size == n
        assert (p * q).truncated(n) == _one(n)

    def test_geometric_series(self) -> None:
        """1 / (1 - x) = 1 + x + x^2 + ..."""
        assert inverse(Polynomial([1, -1]), 6).to_list() == [1] * 6

    def test_method_delegates(self) -> None:
        assert Polynomial([1, -1]).inverse(3).to_list() == [1, 1, 1]

    @pytest.mark.parametrize("n", [1, 5, 16, 70])
    def test_reads_only_prefix(self, n: int, random_poly) -> None:
        """Coefficients at or past x^n do not change inverse(P, n)."""
        p = random_poly(4 * n + 50, constant=3)
        assert inverse(p, n) == inverse(p.truncated(n), n)

    def test_zero_constant_raises(self) -> None:
        """No inverse without an invertible constant term."""
        with pytest.raises(DivisionByZero):
            inverse(Polynomial([0, 1, 2]), 4)
        with pytest.raises(DivisionByZero):
            inverse(Polynomial(), 4)

    def test_precision_must_be_positive(self) -> None:
        with pytest.raises(InvalidPrecondition):
            inverse(Polynomial([1]), 0)


class TestCalculus:
    """Derivative and integral."""

    def test_derivative(self) -> None:
        """d/dx (1 + 2x + 3x^2 + 4x^3) = 2 + 6x + 12x^2."""
        assert derivative(Polynomial([1, 2, 3, 4])).to_list() == [2, 6, 12]

    def test_derivative_of_constant(self) -> None:
        assert derivative(Polynomial([5])).size == 0

    def test_integral(self) -> None:
        """Integral of 2 + 6x + 12x^2 is 2x + 3x^2 + 4x^3."""
        assert integral(Polynomial([2, 6, 12])).to_list() == [0, 2, 3, 4]

    def test_integral_fractions(self) -> None:
        """Integral of 1 is x, of x is x^2 / 2."""
        result = integral(Polynomial([0, 1]))
        assert result[2] == field_inverse(FF(2))

    def test_derivative_inverts_integral(self, random_poly) -> None:
        p = random_poly(30)
        assert derivative(integral(p)) == p


class TestLog:
    """Series logarithm."""

    def test_log_one_plus_x(self) -> None:
        """ln(1 + x) = x - x^2/2 + x^3/3 mod x^4."""
        expected = Polynomial([FF(0), FF(1), -field_inverse(FF(2)), field_inverse(FF(3))])
        result = log(Polynomial([1, 1]), 4)
        assert result.size == 4
        assert result == expected

    def test_log_of_exp_series(self) -> None:
        """ln(1 / (1 - x)) = sum x^k / k."""
        result = log(Polynomial([1] * 6), 6)
        for k in range(1, 6):
            assert result[k] == field_inverse(FF(k))
        assert int(result[0]) == 0

    def test_log_one_minus_x(self) -> None:
        """ln(1 - x) = -sum x^k / k."""
        result = log(Polynomial([1, -1]), 6)
        for k in range(1, 6):
            assert result[k] == -field_inverse(FF(k))

    def test_log_product_rule(self, random_poly) -> None:
        """ln(AB) = ln A + ln B."""
        n = 70
        a = random_poly(40, constant=1)
        b = random_poly(50, constant=1)
        assert log(a * b, n) == log(a, n) + log(b, n)

    def test_zero_constant_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            log(Polynomial([0, 1]), 4)

    def test_precision_one(self) -> None:
        assert log(Polynomial([1, 5]), 1).to_list() == [0]


class TestExp:
    """Series exponential."""

    def test_exp_of_log_one_plus_x(self) -> None:
        """exp(ln(1 + x)) = 1 + x."""
        logged = log(Polynomial([1, 1]), 4)
        assert exp(logged, 4).to_list() == [1, 1, 0, 0]

    def test_exp_of_x(self) -> None:
        """e^x = sum x^k / k!."""
        result = exp(Polynomial([0, 1]), 6)
        fact = 1
        for k in range(6):
            if k:
                fact *= k
            assert result[k] * FF(fact) == FF(1)

    @pytest.mark.parametrize("size,n", [(2, 1), (5, 7), (30, 32), (100, 100)])
    def test_roundtrip(self, size: int, n: int, random_poly) -> None:
        """exp(log(P, n), n) == P mod x^n for P[0] = 1."""
        p = random_poly(size, constant=1)
        assert exp(log(p, n), n) == p.truncated(n)

    def test_log_of_exp(self, random_poly) -> None:
        """log(exp(P)) == P for P[0] = 0."""
        p = random_poly(20, constant=0)
        assert log(exp(p, 20), 20) == p

    def test_nonzero_constant_raises(self) -> None:
        with pytest.raises(InvalidPrecondition):
            exp(Polynomial([1, 1]), 4)

    def test_methods_delegate(self) -> None:
        p = Polynomial([1, 1])
        assert p.log(4).exp(4).to_list() == [1, 1, 0, 0]


class TestModpow:
    """Series powers."""

    @pytest.mark.parametrize("k", [1, 2, 3, 7])
    def test_matches_repeated_multiplication(self, k: int, random_poly) -> None:
        n = 12
        p = random_poly(6, constant=3)
        expected = _one(n)
        for _ in range(k):
            expected = (expected * p).truncated(n)
        assert modpow(p, k, n) == expected

    def test_leading_zeros(self) -> None:
        """(x + x^2)^3 = x^3 + 3x^4 + 3x^5 + x^6."""
        assert modpow(Polynomial([0, 1, 1]), 3, 8).to_list() == [0, 0, 0, 1, 3, 3, 1, 0]

    def test_shift_past_precision(self) -> None:
        """x^2 to a large power vanishes mod x^n."""
        assert modpow(Polynomial([0, 0, 1]), 10 ** 18, 5).to_list() == [0] * 5

    def test_huge_exponent(self) -> None:
        """(1 + x)^k mod x^3 = 1 + kx + k(k-1)/2 x^2 for k beyond p."""
        k = 10 ** 20 + 3
        result = modpow(Polynomial([1, 1]), k, 3)
        assert result.to_list() == [1, k % P, (k * (k - 1) // 2) % P]

    def test_zero_exponent(self) -> None:
        assert modpow(Polynomial([0, 5]), 0, 3).to_list() == [1, 0, 0]

    def test_zero_polynomial(self) -> None:
        assert modpow(Polynomial([0, 0]), 4, 3).to_list() == [0, 0, 0]

    def test_negative_exponent_rejected(self) -> None:
        with pytest.raises(InvalidPrecondition):
            modpow(Polynomial([1, 1]), -1, 3)

    def test_method_delegates(self) -> None:
        assert Polynomial([1, 1]).modpow(2, 4).to_list() == [1, 2, 1, 0]
