"""
Distance between objects, used to decide when successive iterates of a value
function are close enough and to compare two solutions.
"""
import numpy as np


def distance_lists(list_a, list_b):
    """
    Largest distance between corresponding elements of two equally long
    lists, e.g. two iteration histories; otherwise the difference in length.
    """
    len_a = len(list_a)
    len_b = len(list_b)
    if len_a == len_b:
        if len_a == 0:
            return 0.0
        return np.max([distance_metric(list_a[n], list_b[n]) for n in range(len_a)])
    return np.abs(len_a - len_b)


def distance_arrays(arr_a, arr_b):
    """
    Sup-norm of the difference of two arrays of the same shape.  Arrays with a
    different number of dimensions are 10000 apart per dimension; arrays with
    the same number of dimensions but different shapes are apart by the total
    difference in their sizes along each dimension.
    """
    shape_A = arr_a.shape
    shape_B = arr_b.shape
    if shape_A == shape_B:
        if arr_a.size == 0:
            return 0.0
        return np.max(np.abs(arr_a - arr_b))

    if len(shape_A) != len(shape_B):
        return 10000 * np.abs(len(shape_A) - len(shape_B))

    return np.sum(np.abs(np.array(shape_A) - np.array(shape_B)))


def distance_metric(thing_a, thing_b):
    """
    A "universal distance" between two objects.

    Parameters
    ----------
    thing_a : object
        A number, list, array or MetricObject.
    thing_b : object
        Another object of the same kind.

    Returns
    -------
    distance : float
        The distance between thing_a and thing_b; 1000 when they cannot be
        compared.
    """
    if isinstance(thing_a, (int, float)) and isinstance(thing_b, (int, float)):
        return np.abs(thing_a - thing_b)

    if isinstance(thing_a, list) and isinstance(thing_b, list):
        return distance_lists(thing_a, thing_b)

    if isinstance(thing_a, np.ndarray) and isinstance(thing_b, np.ndarray):
        return distance_arrays(thing_a, thing_b)

    if isinstance(thing_a, MetricObject) and isinstance(thing_a, type(thing_b)):
        return thing_a.distance(thing_b)

    # Failsafe: the inputs are very far apart
    return 1000.0


class MetricObject:
    """
    Base class for objects that can be compared with distance_metric, such as
    solutions and interpolated functions.  Subclasses name the attributes that
    matter in distance_criteria.
    """

    distance_criteria = []

    def distance(self, other):
        """
        Largest distance_metric among the attributes named in
        distance_criteria.

        Parameters
        ----------
        other : object
            Another object to compare this instance to.

        Returns
        -------
        (unnamed) : float
            The distance between this object and other, 1000 if other lacks
            one of the attributes.
        """
        try:
            return np.max(
                [
                    distance_metric(getattr(self, attr_name), getattr(other, attr_name))
                    for attr_name in self.distance_criteria
                ]
            )
        except (AttributeError, ValueError):
            return 1000.0
