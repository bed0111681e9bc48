"""
Interpolation classes for turning values on the state grid into functions of
the state.  Each interpolator is a MetricObject, so two solutions can be
compared through the functions they contain.
"""
import warnings

import numpy as np

from HJB.metric import MetricObject


def _check_flatten(x):
    if isinstance(x, np.ndarray) and x.shape != x.flatten().shape:
        warnings.warn("input not of the size (n, ), attempting to flatten")
        return False
    return True


class HJBinterpolator1D(MetricObject):
    """
    A wrapper class for 1D interpolation methods in HJB.
    """

    distance_criteria = []

    def __call__(self, x):
        """
        Evaluates the interpolated function at the given input.

        Parameters
        ----------
        x : np.array or float
            Real values to be evaluated in the interpolated function.

        Returns
        -------
        y : np.array or float
            The interpolated function evaluated at x: y = f(x), with the same
            shape as x.
        """
        z = np.asarray(x, dtype=float)
        return (self._evaluate(z.flatten())).reshape(z.shape)

    def derivative(self, x):
        """
        Evaluates the derivative of the interpolated function at the given input.
        """
        z = np.asarray(x, dtype=float)
        return (self._der(z.flatten())).reshape(z.shape)

    def eval_with_derivative(self, x):
        """
        Evaluates the interpolated function and its derivative at the given input.
        """
        z = np.asarray(x, dtype=float)
        y, dydx = self._evalAndDer(z.flatten())
        return y.reshape(z.shape), dydx.reshape(z.shape)

    def _evaluate(self, x):
        raise NotImplementedError()

    def _der(self, x):
        raise NotImplementedError()

    def _evalAndDer(self, x):
        raise NotImplementedError()


class LinearInterp(HJBinterpolator1D):
    """
    Piecewise linear interpolation over a grid of state values, with linear
    extrapolation above the top gridpoint.

    Parameters
    ----------
    x_list : np.array
        Increasing grid of x values.
    y_list : np.array
        f(x) at each point in x_list.
    lower_extrap : boolean
        Whether to extrapolate linearly below the bottom gridpoint.  If False,
        f(x) = NaN for x < min(x_list).
    """

    distance_criteria = ["x_list", "y_list"]

    def __init__(self, x_list, y_list, lower_extrap=False):
        self.x_list = (
            np.array(x_list, dtype=float)
            if _check_flatten(x_list)
            else np.array(x_list, dtype=float).flatten()
        )
        self.y_list = (
            np.array(y_list, dtype=float)
            if _check_flatten(y_list)
            else np.array(y_list, dtype=float).flatten()
        )
        if self.x_list.size != self.y_list.size:
            raise ValueError("Grid dimensions of x and f(x) do not match")
        if self.x_list.size < 2:
            raise ValueError("LinearInterp needs at least two gridpoints")
        self.lower_extrap = lower_extrap

    def _evalOrDer(self, x, _eval, _Der):
        i = np.maximum(np.searchsorted(self.x_list[:-1], x), 1)
        alpha = (x - self.x_list[i - 1]) / (self.x_list[i] - self.x_list[i - 1])

        output = []
        if _eval:
            y = (1.0 - alpha) * self.y_list[i - 1] + alpha * self.y_list[i]
            output.append(y)
        if _Der:
            dydx = (self.y_list[i] - self.y_list[i - 1]) / (
                self.x_list[i] - self.x_list[i - 1]
            )
            output.append(dydx)

        if not self.lower_extrap:
            below_lower_bound = x < self.x_list[0]
            for arr in output:
                arr[below_lower_bound] = np.nan

        return output

    def _evaluate(self, x):
        return self._evalOrDer(x, True, False)[0]

    def _der(self, x):
        return self._evalOrDer(x, False, True)[0]

    def _evalAndDer(self, x):
        y, dydx = self._evalOrDer(x, True, True)
        return y, dydx
