"""
High-level functions and classes shared by every part of HJB.  This holds the
package logger and its verbosity controls, the exceptions raised when a
problem is set up incorrectly, and the Model class that stores a model's
primitive parameters.
"""

# Set logging and define basic functions
import logging

logging.basicConfig(format="%(message)s")
_log = logging.getLogger("HJB")
_log.setLevel(logging.ERROR)


def disable_logging():
    _log.disabled = True


def enable_logging():
    _log.disabled = False


def warnings():
    _log.setLevel(logging.WARNING)


def quiet():
    _log.setLevel(logging.ERROR)


def verbose():
    _log.setLevel(logging.INFO)


def set_verbosity_level(level):
    _log.setLevel(level)


class InvalidGridError(ValueError):
    """
    Raised when a state grid cannot be used by the finite difference solver:
    fewer than two points, not strictly increasing, not evenly spaced, or a
    different length than the initial guess for the value function.
    """


class InvalidSettingsError(ValueError):
    """
    Raised when a solver setting (pseudo time step, tolerance or iteration
    budget) is not a positive, finite number.
    """


class NumericDomainError(ArithmeticError):
    """
    Raised by a model primitive that was evaluated outside of the domain on
    which it is defined, e.g. the inverse of marginal utility at a marginal
    value that is not strictly positive.  The solver never catches this.
    """


class Model:
    """
    A class with special handling of parameters assignment.
    """

    def __init__(self):
        if not hasattr(self, "parameters"):
            self.parameters = {}

    def assign_parameters(self, **kwds):
        """
        Assign an arbitrary number of attributes to this model.

        Parameters
        ----------
        **kwds : keyword arguments
            Any number of keyword arguments of the form key=value.  Each value
            will be assigned to the attribute named in self.

        Returns
        -------
        none
        """
        self.parameters.update(kwds)
        for key in kwds:
            setattr(self, key, kwds[key])

    def get_parameter(self, name):
        """
        Returns a parameter of this model

        Parameters
        ----------
        name : string
            The name of the parameter to get

        Returns
        -------
        value :
            The value of the parameter
        """
        return self.parameters[name]

    def __eq__(self, other):
        if isinstance(other, type(self)):
            return self.parameters == other.parameters

        return NotImplemented

    def __str__(self):
        type_ = type(self)
        module = type_.__module__
        qualname = type_.__qualname__

        s = f"<{module}.{qualname} object at {hex(id(self))}.\n"
        s += "Parameters:"

        for p in self.parameters:
            s += f"\n{p}: {self.parameters[p]}"

        s += ">"
        return s

    def describe(self):
        return self.__str__()
