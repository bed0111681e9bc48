"""
Period payoff and technology primitives for continuous time growth models:
CRRA utility with its first derivative and inverse marginal utility, and the
Cobb-Douglas production function with its derivative.
"""
import functools

import numpy as np

from HJB.core import NumericDomainError


def utility_fix(func):
    """
    Make a utility function return NaN at negative consumption, for scalar and
    array arguments alike.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if np.ndim(args[0]) == 0:
            if args[0] < 0.0:
                return np.nan
            else:
                return func(*[np.array([args[0]])] + list(args[1:]), **kwargs)[0]
        else:
            c = np.asarray(args[0], dtype=float)
            out = np.asarray(func(*[c] + list(args[1:]), **kwargs), dtype=float)
            out[c < 0.0] = np.nan
            return out

    return wrapper


# ==============================================================================
# ============== Define utility functions        ===============================
# ==============================================================================


@utility_fix
def CRRAutility(c, rho):
    """
    Evaluates constant relative risk aversion (CRRA) utility of consumption c
    given risk aversion parameter rho.

    Parameters
    ----------
    c : float or array
        Consumption value
    rho : float
        Risk aversion

    Returns
    -------
    u : float or array
        Utility

    Tests
    -----
    >>> CRRAutility(c=1.0, rho=2.0)
    -1.0
    """
    with np.errstate(divide="ignore"):
        if rho == 1:
            return np.log(c)
        return c ** (1.0 - rho) / (1.0 - rho)


@utility_fix
def CRRAutilityP(c, rho):
    """
    Evaluates constant relative risk aversion (CRRA) marginal utility of
    consumption c given risk aversion parameter rho.

    Parameters
    ----------
    c : float or array
        Consumption value
    rho : float
        Risk aversion

    Returns
    -------
    uP : float or array
        Marginal utility
    """
    with np.errstate(divide="ignore"):
        if rho == 1:
            return 1.0 / c
        return c**-rho


def CRRAutilityP_inv(uP, rho):
    """
    Evaluates the inverse of the CRRA marginal utility function (with risk
    aversion parameter rho) at a given marginal utility level uP.  Marginal
    utility is strictly positive, so any uP <= 0 has no preimage.

    Parameters
    ----------
    uP : float or array
        Marginal utility value
    rho : float
        Risk aversion

    Returns
    -------
    (unnamed) : float or array
        Consumption corresponding to given marginal utility value.

    Raises
    ------
    NumericDomainError
        If any element of uP is not strictly positive and finite.
    """
    uP_arr = np.asarray(uP, dtype=float)
    bad = ~(np.isfinite(uP_arr) & (uP_arr > 0.0))
    if np.any(bad):
        first = uP_arr.flat[int(np.argmax(bad.ravel()))]
        raise NumericDomainError(
            "Inverse marginal utility is undefined at uP="
            + str(first)
            + " ("
            + str(int(np.sum(bad)))
            + " offending value(s)); marginal utility must be positive."
        )
    out = uP_arr ** (-1.0 / rho)
    return out[()] if out.ndim == 0 else out


# ==============================================================================
# ============== Define production functions     ===============================
# ==============================================================================


def _check_capital(k):
    if np.any(np.asarray(k) < 0.0):
        raise NumericDomainError("Production is undefined at negative capital.")


def cobb_douglas(k, alpha, TFP=1.0):
    """
    Evaluates the Cobb-Douglas production function TFP * k**alpha.

    Parameters
    ----------
    k : float or array
        Capital stock, must be non-negative.
    alpha : float
        Capital share, between zero and one.
    TFP : float
        Total factor productivity.

    Returns
    -------
    y : float or array
        Output.
    """
    _check_capital(k)
    return TFP * k**alpha


def cobb_douglas_p(k, alpha, TFP=1.0):
    """
    Evaluates the marginal product of capital of the Cobb-Douglas production
    function, alpha * TFP * k**(alpha - 1).
    """
    _check_capital(k)
    with np.errstate(divide="ignore"):
        return alpha * TFP * k ** (alpha - 1.0)
