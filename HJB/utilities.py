"""
General purpose functions for building and checking the grids used by the
finite difference solver.
"""

import numpy as np

from HJB.core import InvalidGridError


def make_uniform_grid(k_min, k_max, count):
    """
    Make an evenly spaced grid of state values.

    Parameters
    ----------
    k_min : float
        Lowest gridpoint.
    k_max : float
        Highest gridpoint; must exceed k_min.
    count : int
        Number of gridpoints, at least 2.

    Returns
    -------
    grid : np.array
        Evenly spaced, strictly increasing array of length count.
    """
    if int(count) != count or count < 2:
        raise InvalidGridError(
            "A grid needs an integer number of points of at least 2, got "
            + str(count)
        )
    if not k_min < k_max:
        raise InvalidGridError(
            "Grid bounds must satisfy k_min < k_max, got "
            + str(k_min)
            + " and "
            + str(k_max)
        )
    return np.linspace(k_min, k_max, int(count))


def check_uniform_grid(grid, rtol=1e-6):
    """
    Verify that grid is a one dimensional, strictly increasing, evenly spaced
    array of at least two points, and return its spacing.

    Parameters
    ----------
    grid : np.array
        Candidate grid.
    rtol : float
        Largest tolerated deviation of any step from the first step, relative
        to the first step.

    Returns
    -------
    dk : float
        The spacing between adjacent gridpoints.
    """
    grid = np.asarray(grid, dtype=float)
    if grid.ndim != 1:
        raise InvalidGridError("The grid must be one dimensional.")
    if grid.size < 2:
        raise InvalidGridError(
            "The grid must have at least 2 points, got " + str(grid.size)
        )
    if not np.all(np.isfinite(grid)):
        raise InvalidGridError("The grid contains non-finite values.")

    steps = np.diff(grid)
    if np.any(steps <= 0.0):
        raise InvalidGridError("The grid must be strictly increasing.")

    dk = steps[0]
    if np.max(np.abs(steps - dk)) > rtol * dk:
        raise InvalidGridError(
            "The grid must be evenly spaced; steps range from "
            + str(np.min(steps))
            + " to "
            + str(np.max(steps))
        )
    return float(dk)
