"""
The deterministic neoclassical growth model in continuous time, solved as a
stationary HJB equation on a uniform capital grid.  A planner with CRRA
preferences chooses consumption to maximize discounted utility subject to

    dk/dt = A * k**alpha - delta * k - c.

Besides solving for the value and consumption functions, the model type
computes the steady state analytically and simulates the perfect foresight
transition of capital toward it.
"""
from time import time

import numpy as np
from scipy.optimize import brentq

from HJB.core import Model, _log
from HJB.rewards import (
    CRRAutility,
    CRRAutilityP,
    CRRAutilityP_inv,
    cobb_douglas,
    cobb_douglas_p,
)
from HJB.solver import HJBParameters, HJBSettings, solve_HJB
from HJB.utilities import make_uniform_grid

__all__ = ["NeoclassicalGrowthType", "init_neoclassical_growth"]

# Make a dictionary to specify a neoclassical growth model
init_neoclassical_growth = {
    # PARAMETERS REQUIRED TO SOLVE THE MODEL
    "CRRA": 2.0,  # Coefficient of relative risk aversion
    "CapShare": 0.3,  # Capital's share in Cobb-Douglas production
    "DeprFac": 0.05,  # Depreciation rate of capital
    "DiscRate": 0.05,  # Rate of time preference
    "TFP": 1.0,  # Total factor productivity
    # PARAMETERS FOR CONSTRUCTING THE CAPITAL GRID
    "kCount": 10000,  # Number of gridpoints
    "kMinMult": 0.001,  # Lowest gridpoint as a multiple of steady state capital
    "kMaxMult": 2.0,  # Highest gridpoint as a multiple of steady state capital
    # PARAMETERS OF THE SOLUTION METHOD
    "dv": 1000.0,  # Pseudo time step of the implicit update
    "tolerance": 1e-8,  # Convergence threshold on the value function
    "max_iter": 100,  # Maximum number of iterations
}


class NeoclassicalGrowthType(Model):
    r"""
    A representative planner in the continuous time neoclassical growth model.

    .. math::
        \begin{align*}
        \rho v(k) &= \max_{c} u(c) + v'(k) (A k^\alpha - \delta k - c), \\
        u(c) &= \frac{c^{1-\gamma}}{1-\gamma}
        \end{align*}

    Parameters
    ----------
    CRRA : float, :math:`\gamma`
        Coefficient of relative risk aversion.
    CapShare : float, :math:`\alpha`
        Capital share in production.
    DeprFac : float, :math:`\delta`
        Depreciation rate.
    DiscRate : float, :math:`\rho`
        Rate of time preference.
    TFP : float, :math:`A`
        Total factor productivity.
    kCount, kMinMult, kMaxMult :
        Size and bounds of the capital grid, bounds as multiples of steady
        state capital.
    dv, tolerance, max_iter :
        Settings of the implicit upwind iteration.

    Attributes
    ----------
    solution : HJBSolution
        Created by :func:`solve`.
    """

    def __init__(self, **kwds):
        super().__init__()
        params = init_neoclassical_growth.copy()
        params.update(kwds)
        self.assign_parameters(**params)
        self.check_restrictions()
        self.solution = None

    def check_restrictions(self):
        """
        A method to check that various restrictions are met for the model class.
        """
        if self.DiscRate <= 0:
            raise ValueError("DiscRate must be positive, got " + str(self.DiscRate))
        if self.DeprFac < 0:
            raise ValueError("DeprFac is below zero with value: " + str(self.DeprFac))
        if self.CRRA <= 0:
            raise ValueError("CRRA must be positive, got " + str(self.CRRA))
        if not 0 < self.CapShare < 1:
            raise ValueError(
                "CapShare must lie strictly between 0 and 1, got "
                + str(self.CapShare)
            )
        if self.TFP <= 0:
            raise ValueError("TFP must be positive, got " + str(self.TFP))
        if not 0 < self.kMinMult < self.kMaxMult:
            raise ValueError("Capital grid bounds must satisfy 0 < kMinMult < kMaxMult")

    # Primitives handed to the solver

    def production(self, k):
        return cobb_douglas(k, self.CapShare, self.TFP)

    def marginal_product(self, k):
        return cobb_douglas_p(k, self.CapShare, self.TFP)

    def utility(self, c):
        return CRRAutility(c, self.CRRA)

    def marginal_utility(self, c):
        return CRRAutilityP(c, self.CRRA)

    def law_of_motion(self, k, c):
        return self.production(k) - self.DeprFac * k - c

    def control_from_derivative(self, vP):
        return CRRAutilityP_inv(vP, self.CRRA)

    # Construction of the problem

    def calc_steady_state(self, analytic=True):
        """
        Find steady state capital, where the marginal product of capital equals
        DiscRate + DeprFac, and steady state consumption, which makes the drift
        zero there.

        Parameters
        ----------
        analytic : bool
            Use the Cobb-Douglas closed form if True, otherwise find the root
            of the marginal product condition numerically.

        Returns
        -------
        k_ss : float
        c_ss : float
        """
        target = self.DiscRate + self.DeprFac
        if analytic:
            k_ss = (self.CapShare * self.TFP / target) ** (1.0 / (1.0 - self.CapShare))
        else:
            # the marginal product falls from +inf toward zero, so bracket upward
            lo, hi = 1e-10, 1.0
            while self.marginal_product(hi) > target:
                hi *= 2.0
            k_ss = brentq(lambda k: self.marginal_product(k) - target, lo, hi)
        c_ss = self.production(k_ss) - self.DeprFac * k_ss
        return k_ss, c_ss

    def make_grid(self):
        k_ss, _ = self.calc_steady_state()
        return make_uniform_grid(self.kMinMult * k_ss, self.kMaxMult * k_ss, self.kCount)

    def make_initial_guess(self, grid):
        """
        Value of consuming current output forever, the standard starting point.
        """
        return self.utility(self.production(grid)) / self.DiscRate

    def make_HJB_parameters(self):
        return HJBParameters(
            DiscRate=self.DiscRate,
            DeprFac=self.DeprFac,
            CRRA=self.CRRA,
            production=self.production,
            utility=self.utility,
            marginal_utility=self.marginal_utility,
            law_of_motion=self.law_of_motion,
            control_from_derivative=self.control_from_derivative,
        )

    def make_HJB_settings(self, grid=None, v_init=None):
        if grid is None:
            grid = self.make_grid()
        if v_init is None:
            v_init = self.make_initial_guess(grid)
        return HJBSettings(
            grid=grid,
            dv=self.dv,
            max_iter=self.max_iter,
            tolerance=self.tolerance,
            v_init=v_init,
        )

    def solve(self, v_init=None):
        """
        Solve the model and store the result in self.solution.

        Parameters
        ----------
        v_init : np.array, optional
            Initial guess for the value function; defaults to
            make_initial_guess on the default grid.

        Returns
        -------
        HJBSolution
        """
        t_start = time()
        self.solution = solve_HJB(
            self.make_HJB_parameters(), self.make_HJB_settings(v_init=v_init)
        )
        _log.info(
            "Solved the neoclassical growth model in "
            + str(time() - t_start)
            + " seconds."
        )
        return self.solution

    # Using the solution

    def _get_solution(self, solution):
        if solution is not None:
            return solution
        if self.solution is None:
            raise ValueError("The model has not been solved yet; call solve() first.")
        return self.solution

    def calc_savings(self, solution=None):
        """
        Savings policy s(k) = f(k, c(k)) on the grid, the drift of capital.
        """
        solution = self._get_solution(solution)
        return self.law_of_motion(solution.grid, solution.control)

    def find_savings_root(self, solution=None):
        """
        Capital at which the savings policy first turns from positive to
        non-positive, interpolating linearly between gridpoints.

        Returns
        -------
        k_root : float
        """
        solution = self._get_solution(solution)
        grid = solution.grid
        savings = self.calc_savings(solution)
        crossings = np.where(np.diff(np.sign(savings)) < 0)[0]
        if crossings.size == 0:
            raise ValueError("Savings do not change sign on the capital grid.")
        i = crossings[0]
        if savings[i] == 0.0:
            return grid[i]
        weight = savings[i] / (savings[i] - savings[i + 1])
        return grid[i] + weight * (grid[i + 1] - grid[i])

    def simulate_transition(self, k_init, T, dt=0.1, solution=None):
        """
        Perfect foresight path of capital and consumption starting from k_init,
        integrating dk/dt = f(k, c(k)) forward with the interpolated
        consumption function.

        Parameters
        ----------
        k_init : float
            Initial capital, inside the grid.
        T : float
            Length of the simulation.
        dt : float
            Time step.

        Returns
        -------
        t_path : np.array
        k_path : np.array
        c_path : np.array
        """
        solution = self._get_solution(solution)
        grid = solution.grid
        if not grid[0] <= k_init <= grid[-1]:
            raise ValueError(
                "Initial capital "
                + str(k_init)
                + " lies outside the grid ["
                + str(grid[0])
                + ", "
                + str(grid[-1])
                + "]"
            )
        if dt <= 0 or T <= 0:
            raise ValueError("T and dt must be positive")

        steps = int(np.ceil(T / dt))
        t_path = dt * np.arange(steps + 1)
        k_path = np.empty(steps + 1)
        c_path = np.empty(steps + 1)
        k_path[0] = k_init
        for t in range(steps):
            c_path[t] = solution.cFunc(k_path[t])
            k_next = k_path[t] + dt * self.law_of_motion(k_path[t], c_path[t])
            k_path[t + 1] = min(max(k_next, grid[0]), grid[-1])
        c_path[-1] = solution.cFunc(k_path[-1])
        return t_path, k_path, c_path
