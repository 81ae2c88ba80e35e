"""ntt_poly - polynomial and formal power series arithmetic over NTT-friendly primes."""

from ntt_poly.combinatorics import Combinatorics
from ntt_poly.division import (
    bostan_mori,
    divide,
    divmod_poly,
    linear_recurrence_nth,
    remainder,
)
from ntt_poly.errors import (
    DivisionByZero,
    InvalidPrecondition,
    UnsupportedModulus,
)
from ntt_poly.field import (
    DEFAULT_CONFIG,
    DEFAULT_PRIME,
    FF,
    FieldConfig,
    batch_inverse,
    element,
    field_config,
    inverse,
    make_field,
    power,
    to_field,
    two_adicity,
)
from ntt_poly.ntt import RootCache, get_root_cache, intt, ntt
from ntt_poly.polynomial import (
    NAIVE_THRESHOLD,
    Polynomial,
    multiply,
    naive_multiply,
    ntt_multiply,
)
from ntt_poly.series import derivative, exp, integral, log, modpow
from ntt_poly.series import inverse as series_inverse

__all__ = [
    # Field
    "FF",
    "DEFAULT_PRIME",
    "DEFAULT_CONFIG",
    "FieldConfig",
    "make_field",
    "field_config",
    "two_adicity",
    "element",
    "to_field",
    "inverse",
    "power",
    "batch_inverse",
    # Errors
    "DivisionByZero",
    "InvalidPrecondition",
    "UnsupportedModulus",
    # NTT
    "RootCache",
    "get_root_cache",
    "ntt",
    "intt",
    # Polynomial
    "Polynomial",
    "NAIVE_THRESHOLD",
    "multiply",
    "naive_multiply",
    "ntt_multiply",
    # Power series
    "series_inverse",
    "derivative",
    "integral",
    "log",
    "exp",
    "modpow",
    # Division
    "divide",
    "divmod_poly",
    "remainder",
    "bostan_mori",
    "linear_recurrence_nth",
    # Combinatorics
    "Combinatorics",
]
