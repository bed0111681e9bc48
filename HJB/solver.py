"""
Implicit upwind finite difference solver for stationary Hamilton-Jacobi-Bellman
equations with a one dimensional state,

    rho * v(k) = max_c { u(c) + v'(k) * f(k, c) },

where f(k, c) is the drift of the state.  Each iteration picks a forward or
backward difference for v' at every gridpoint according to the sign of the
drift it implies, recovers the control from the first order condition
u'(c) = v'(k), and takes one implicit pseudo time step of length dv:

    ((rho + 1/dv) I - A) v_new = u(c) + v / dv,

where A is the tridiagonal generator of the upwinded drift.  Iteration stops
when max |v_new - v| falls below a tolerance or the iteration budget runs out.
"""
from dataclasses import dataclass
from time import time
from typing import Callable, Optional

import numpy as np

from HJB.core import InvalidGridError, InvalidSettingsError, _log
from HJB.interpolation import LinearInterp
from HJB.mat_methods import TridiagonalMatrix
from HJB.metric import MetricObject, distance_metric
from HJB.utilities import check_uniform_grid

__all__ = [
    "HJBParameters",
    "HJBSettings",
    "HJBSolution",
    "UpwindStep",
    "calc_upwind_derivatives",
    "make_generator_matrix",
    "hjb_upwind_step",
    "solve_HJB",
    "calc_HJB_residual",
]


@dataclass
class HJBParameters:
    """
    Primitives of a stationary HJB problem.  The solver only ever calls the
    functions stored here, so any model that provides them can be solved.

    Parameters
    ----------
    DiscRate : float
        Discount rate rho, must be positive.
    DeprFac : float
        Depreciation rate delta of the state.
    CRRA : float
        Coefficient of relative risk aversion gamma.
    production : callable
        F(k), output at state k.
    utility : callable
        u(c), flow payoff of control c.
    marginal_utility : callable
        u'(c), strictly decreasing.
    law_of_motion : callable
        f(k, c), drift of the state under control c.
    control_from_derivative : callable
        c(vP), the inverse of marginal_utility.
    zero_drift_control : callable, optional
        Control used at gridpoints where neither upwind direction applies.
        Defaults to law_of_motion(k, 0), the control that makes the drift
        exactly zero.
    """

    DiscRate: float
    DeprFac: float
    CRRA: float
    production: Callable
    utility: Callable
    marginal_utility: Callable
    law_of_motion: Callable
    control_from_derivative: Callable
    zero_drift_control: Optional[Callable] = None

    def calc_zero_drift_control(self, k):
        if self.zero_drift_control is not None:
            return self.zero_drift_control(k)
        return self.law_of_motion(k, np.zeros_like(k))


@dataclass
class HJBSettings:
    """
    Numerical settings for solve_HJB.

    Parameters
    ----------
    grid : np.array
        Evenly spaced, strictly increasing state grid.
    dv : float
        Pseudo time step of the implicit update; larger is less damped.
    max_iter : int
        Iteration budget.
    tolerance : float
        Convergence threshold on max |v_new - v|.
    v_init : np.array
        Initial guess for the value function on grid.
    """

    grid: np.ndarray
    dv: float
    max_iter: int
    tolerance: float
    v_init: np.ndarray

    def validate(self):
        """
        Check the settings before iterating and return the grid spacing.

        Returns
        -------
        dk : float
        """
        for name in ("dv", "tolerance"):
            value = getattr(self, name)
            if not (np.isscalar(value) and np.isfinite(value) and value > 0):
                raise InvalidSettingsError(
                    name + " must be a positive finite number, got " + str(value)
                )
        if (
            isinstance(self.max_iter, (bool, np.bool_))
            or int(self.max_iter) != self.max_iter
            or self.max_iter < 1
        ):
            raise InvalidSettingsError(
                "max_iter must be a positive integer, got " + str(self.max_iter)
            )

        dk = check_uniform_grid(self.grid)
        v_init = np.asarray(self.v_init, dtype=float)
        if v_init.shape != np.shape(self.grid):
            raise InvalidGridError(
                "Initial guess has shape "
                + str(v_init.shape)
                + " but the grid has shape "
                + str(np.shape(self.grid))
            )
        return dk


@dataclass
class UpwindStep:
    """
    Everything computed in one iteration of the solver, from the frozen value
    function v.  Arrays are indexed by gridpoint.
    """

    dv_f: np.ndarray
    dv_b: np.ndarray
    drift_f: np.ndarray
    drift_b: np.ndarray
    I_f: np.ndarray
    I_b: np.ndarray
    I_0: np.ndarray
    control: np.ndarray
    payoff: np.ndarray
    generator: TridiagonalMatrix
    v_new: np.ndarray
    distance: float


class HJBSolution(MetricObject):
    """
    Result of solve_HJB.  Unpacks as (value, control, history).

    Parameters
    ----------
    grid : np.array
        State grid.
    value : np.array
        Value function on the grid, the last iterate computed.
    control : np.array
        Control policy on the grid, the one that produced value.
    history : [np.array]
        Value function after each completed iteration.
    distances : np.array
        max |v_new - v| at each completed iteration.
    converged : bool
        Whether the last distance fell below the tolerance.
    """

    distance_criteria = ["value"]

    def __init__(self, grid, value, control, history, distances, converged):
        self.grid = grid
        self.value = value
        self.control = control
        self.history = history
        self.distances = np.asarray(distances, dtype=float)
        self.converged = converged
        self.vFunc = LinearInterp(grid, value)
        self.cFunc = LinearInterp(grid, control)

    @property
    def iterations(self):
        return len(self.history)

    @property
    def final_distance(self):
        return self.distances[-1] if self.distances.size > 0 else np.inf

    def __iter__(self):
        return iter((self.value, self.control, self.history))


def calc_upwind_derivatives(v, dk):
    """
    Forward and backward difference approximations to v' at every gridpoint.
    At the top gridpoint the forward difference repeats the last difference,
    and at the bottom gridpoint the backward difference repeats the first.

    Parameters
    ----------
    v : np.array
        Value function on the grid.
    dk : float
        Grid spacing.

    Returns
    -------
    dv_f : np.array
    dv_b : np.array
    """
    dv = np.diff(v) / dk
    dv_f = np.append(dv, dv[-1])
    dv_b = np.insert(dv, 0, dv[0])
    return dv_f, dv_b


def make_generator_matrix(drift_f, drift_b, dk):
    """
    Tridiagonal generator of the upwinded drift.  Row i has
    -min(drift_b[i], 0)/dk below the diagonal, max(drift_f[i], 0)/dk above it,
    and minus their sum on the diagonal.  The first row has no sub-diagonal
    entry and the last row no super-diagonal entry.

    Returns
    -------
    TridiagonalMatrix
    """
    up = np.maximum(drift_f, 0.0) / dk
    down = np.minimum(drift_b, 0.0) / dk
    return TridiagonalMatrix(-down[1:], -up + down, up[:-1])


def hjb_upwind_step(v, params, grid, dk, dv):
    """
    Take one implicit upwind step from the value function v.

    Parameters
    ----------
    v : np.array
        Current value function on grid; not modified.
    params : HJBParameters
        Model primitives.
    grid : np.array
        State grid.
    dk : float
        Grid spacing.
    dv : float
        Pseudo time step.

    Returns
    -------
    UpwindStep
    """
    dv_f, dv_b = calc_upwind_derivatives(v, dk)

    c_f = params.control_from_derivative(dv_f)
    c_b = params.control_from_derivative(dv_b)
    drift_f = np.array(params.law_of_motion(grid, c_f), dtype=float)
    drift_b = np.array(params.law_of_motion(grid, c_b), dtype=float)

    # reflecting boundaries: no drift out of the grid
    drift_f[-1] = 0.0
    drift_b[0] = 0.0

    I_f = drift_f > 0.0
    I_b = (drift_b < 0.0) & ~I_f
    I_0 = ~(I_f | I_b)

    c_0 = params.calc_zero_drift_control(grid)
    control = np.where(I_f, c_f, np.where(I_b, c_b, c_0))
    payoff = params.utility(control)

    generator = make_generator_matrix(drift_f, drift_b, dk)
    system = generator.shifted(-1.0, params.DiscRate + 1.0 / dv)
    v_new = system.solve(payoff + v / dv)

    return UpwindStep(
        dv_f=dv_f,
        dv_b=dv_b,
        drift_f=drift_f,
        drift_b=drift_b,
        I_f=I_f,
        I_b=I_b,
        I_0=I_0,
        control=control,
        payoff=payoff,
        generator=generator,
        v_new=v_new,
        distance=distance_metric(v_new, v),
    )


def solve_HJB(params, settings):
    """
    Iterate implicit upwind steps from settings.v_init until the value
    function converges or settings.max_iter iterations have been taken.

    Running out of iterations is not an error: the last iterate is returned
    with converged=False and a warning is logged.  Errors raised by the
    functions in params propagate unchanged.

    Parameters
    ----------
    params : HJBParameters
        Model primitives.
    settings : HJBSettings
        Grid, step size, tolerance, iteration budget and initial guess.

    Returns
    -------
    HJBSolution
    """
    dk = settings.validate()
    grid = np.asarray(settings.grid, dtype=float)
    v = np.array(settings.v_init, dtype=float)

    history = []
    distances = []
    converged = False
    control = None
    t_start = time()

    for it in range(int(settings.max_iter)):
        step = hjb_upwind_step(v, params, grid, dk, settings.dv)
        v = step.v_new
        control = step.control
        history.append(v.copy())
        distances.append(step.distance)
        _log.info(
            "Finished iteration #"
            + str(it + 1)
            + ", value function distance = "
            + str(step.distance)
        )
        if step.distance < settings.tolerance:
            converged = True
            break

    elapsed = time() - t_start
    if converged:
        _log.info(
            "Value function converged after "
            + str(len(history))
            + " iterations in "
            + str(elapsed)
            + " seconds."
        )
    else:
        _log.warning(
            "Value function did not converge in "
            + str(settings.max_iter)
            + " iterations; last distance = "
            + str(distances[-1])
        )

    return HJBSolution(grid, v, control, history, distances, converged)


def calc_HJB_residual(v, params, grid):
    """
    Residual rho * v - u(c) - A v of the discretized stationary HJB equation,
    with the control c and generator A implied by v itself.  It is zero at an
    exact fixed point of the solver.

    Parameters
    ----------
    v : np.array or HJBSolution
        Value function on grid.
    params : HJBParameters
    grid : np.array

    Returns
    -------
    np.array
    """
    if isinstance(v, HJBSolution):
        v = v.value
    grid = np.asarray(grid, dtype=float)
    dk = check_uniform_grid(grid)
    v = np.asarray(v, dtype=float)
    # with dv = inf the step reduces to the stationary equation
    step = hjb_upwind_step(v, params, grid, dk, np.inf)
    return params.DiscRate * v - step.payoff - step.generator.dot(v)
