"""
This file implements unit tests to check HJB/rewards.py and HJB/utilities.py
"""
import unittest

import numpy as np

from HJB.core import InvalidGridError, NumericDomainError
from HJB.rewards import (
    CRRAutility,
    CRRAutilityP,
    CRRAutilityP_inv,
    cobb_douglas,
    cobb_douglas_p,
)
from HJB.utilities import check_uniform_grid, make_uniform_grid


class testsForCRRA(unittest.TestCase):
    def setUp(self):
        self.c_vals = np.linspace(0.5, 10.0, 20)
        self.CRRA_vals = np.linspace(1.0, 10.0, 10)

    def first_diff_approx(self, func, x, delta, *args):
        """
        Take the first (centered) difference approximation to the derivative of a function.
        """
        return (func(x + delta, *args) - func(x - delta, *args)) / (2.0 * delta)

    def test_CRRAutilityP(self):
        for c in self.c_vals:
            for CRRA in self.CRRA_vals:
                diff = abs(
                    CRRAutilityP(c, CRRA)
                    - self.first_diff_approx(CRRAutility, c, 0.000001, CRRA)
                )
                self.assertLess(diff, 1e-4)

    def test_inverse_marginal_utility(self):
        for CRRA in self.CRRA_vals:
            uP = CRRAutilityP(self.c_vals, CRRA)
            np.testing.assert_allclose(CRRAutilityP_inv(uP, CRRA), self.c_vals)

    def test_inverse_marginal_utility_input_types(self):
        out = CRRAutilityP_inv([1.0, 4.0], 2.0)
        self.assertIsInstance(out, np.ndarray)
        np.testing.assert_allclose(out, [1.0, 0.5])
        scalar = CRRAutilityP_inv(4.0, 2.0)
        self.assertEqual(np.ndim(scalar), 0)
        self.assertAlmostEqual(scalar, 0.5)

    def test_known_values(self):
        self.assertAlmostEqual(CRRAutility(1.0, 2.0), -1.0)
        self.assertAlmostEqual(CRRAutility(np.e, 1.0), 1.0)
        self.assertAlmostEqual(CRRAutilityP(2.0, 2.0), 0.25)
        self.assertAlmostEqual(CRRAutilityP(4.0, 1.0), 0.25)

    def test_negative_consumption(self):
        self.assertTrue(np.isnan(CRRAutility(-1.0, 2.0)))
        out = CRRAutilityP(np.array([-1.0, 1.0]), 2.0)
        self.assertTrue(np.isnan(out[0]))
        self.assertEqual(out[1], 1.0)

    def test_inverse_domain_error(self):
        with self.assertRaises(NumericDomainError):
            CRRAutilityP_inv(np.array([1.0, 0.0, 2.0]), 2.0)
        with self.assertRaises(NumericDomainError):
            CRRAutilityP_inv(-0.5, 2.0)
        with self.assertRaises(NumericDomainError):
            CRRAutilityP_inv(np.array([np.nan]), 2.0)


class testsForProduction(unittest.TestCase):
    def test_cobb_douglas(self):
        self.assertAlmostEqual(cobb_douglas(8.0, 1.0 / 3.0, 2.0), 4.0)
        self.assertAlmostEqual(
            cobb_douglas_p(2.0, 0.3),
            (cobb_douglas(2.0 + 1e-6, 0.3) - cobb_douglas(2.0 - 1e-6, 0.3)) / 2e-6,
            places=6,
        )

    def test_negative_capital(self):
        with self.assertRaises(NumericDomainError):
            cobb_douglas(np.array([1.0, -1.0]), 0.3)


class testsForGrids(unittest.TestCase):
    def test_make_uniform_grid(self):
        grid = make_uniform_grid(1.0, 3.0, 5)
        np.testing.assert_allclose(grid, [1.0, 1.5, 2.0, 2.5, 3.0])
        self.assertAlmostEqual(check_uniform_grid(grid), 0.5)

    def test_bad_grid_arguments(self):
        with self.assertRaises(InvalidGridError):
            make_uniform_grid(1.0, 3.0, 1)
        with self.assertRaises(InvalidGridError):
            make_uniform_grid(3.0, 1.0, 10)

    def test_check_uniform_grid(self):
        with self.assertRaises(InvalidGridError):
            check_uniform_grid(np.array([1.0]))
        with self.assertRaises(InvalidGridError):
            check_uniform_grid(np.array([1.0, 2.0, 2.0]))
        with self.assertRaises(InvalidGridError):
            check_uniform_grid(np.array([3.0, 2.0, 1.0]))
        with self.assertRaises(InvalidGridError):
            check_uniform_grid(np.array([1.0, 2.0, 4.0]))
        with self.assertRaises(InvalidGridError):
            check_uniform_grid(np.ones((2, 2)))
        # two points are enough
        self.assertAlmostEqual(check_uniform_grid(np.array([0.0, 0.25])), 0.25)
