"""
Distribution primitives used to turn test statistics into p-values.

The regularised incomplete gamma and beta functions come from
``scipy.special``, which switches between the power series and the
continued-fraction expansion (and uses the ``I_x(a, b) = 1 - I_{1-x}(b, a)``
reflection) internally. The CDFs below are expressed through them.

All functions are total on their domains and never raise; out-of-domain
degrees of freedom are the caller's responsibility.
"""

from __future__ import annotations

import math

from scipy import special


def log_gamma(x: float) -> float:
    """Natural log of the gamma function for ``x > 0``."""
    return float(special.gammaln(x))


def regularized_gamma_p(a: float, x: float) -> float:
    """Regularised lower incomplete gamma ``P(a, x)``."""
    if x <= 0:
        return 0.0
    return float(special.gammainc(a, x))


def regularized_beta(a: float, b: float, x: float) -> float:
    """Regularised incomplete beta ``I_x(a, b)``."""
    if x <= 0:
        return 0.0
    if x >= 1:
        return 1.0
    return float(special.betainc(a, b, x))


def f_cdf(f: float, df1: float, df2: float) -> float:
    """CDF of the F distribution, ``P(X <= f)`` for ``X ~ F(df1, df2)``."""
    if f <= 0:
        return 0.0
    z = (df1 * f) / (df1 * f + df2)
    return regularized_beta(df1 / 2.0, df2 / 2.0, z)


def t_cdf(t: float, df: float) -> float:
    """CDF of Student's t distribution with ``df`` degrees of freedom."""
    x = df / (df + t * t)
    ib = regularized_beta(df / 2.0, 0.5, x)
    if t >= 0:
        return 1.0 - 0.5 * ib
    return 0.5 * ib


def normal_cdf(z: float) -> float:
    """Standard normal CDF."""
    if math.isnan(z):
        return math.nan
    return float(special.ndtr(z))


def chi2_cdf(x: float, df: float) -> float:
    """CDF of the chi-square distribution with ``df`` degrees of freedom."""
    if x <= 0 or df <= 0:
        return 0.0
    return regularized_gamma_p(df / 2.0, x / 2.0)
