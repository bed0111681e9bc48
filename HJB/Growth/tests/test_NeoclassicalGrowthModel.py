import unittest

import numpy as np

from HJB.Growth.NeoclassicalGrowthModel import (
    NeoclassicalGrowthType,
    init_neoclassical_growth,
)


class testNeoclassicalGrowthType(unittest.TestCase):
    def setUp(self):
        self.model = NeoclassicalGrowthType()
        self.model.solve()
        self.k_ss, self.c_ss = self.model.calc_steady_state()

    def test_defaults(self):
        for key, value in init_neoclassical_growth.items():
            self.assertEqual(self.model.get_parameter(key), value)
        self.assertEqual(self.model.solution.grid.size, 10000)
        self.assertAlmostEqual(self.model.solution.grid[0], 0.001 * self.k_ss)
        self.assertAlmostEqual(self.model.solution.grid[-1], 2.0 * self.k_ss)

    def test_convergence(self):
        solution = self.model.solution
        self.assertTrue(solution.converged)
        self.assertLessEqual(solution.iterations, 100)
        self.assertLess(solution.final_distance, 1e-8)
        # the sup-norm change never grows from one iteration to the next
        self.assertTrue(np.all(np.diff(solution.distances) <= 1e-12))

    def test_consumption_increasing(self):
        control = self.model.solution.control
        self.assertTrue(np.all(np.isfinite(control)))
        self.assertTrue(np.all(np.diff(control) > -1e-12))
        self.assertLess(control[0], control[-1])

    def test_value_function_shape(self):
        value = self.model.solution.value
        self.assertTrue(np.all(np.diff(value) > 0.0))
        self.assertTrue(np.all(value < 0.0))

    def test_savings_cross_zero_at_steady_state(self):
        savings = self.model.calc_savings()
        self.assertGreater(savings[0], 0.0)
        self.assertLess(savings[-1], 0.0)
        k_root = self.model.find_savings_root()
        self.assertAlmostEqual(k_root / self.k_ss, 1.0, delta=0.01)
        self.assertAlmostEqual(
            self.model.solution.cFunc(self.k_ss) / self.c_ss, 1.0, delta=0.01
        )

    def test_transition(self):
        t_path, k_path, c_path = self.model.simulate_transition(
            0.5 * self.k_ss, T=200.0, dt=0.1
        )
        self.assertEqual(t_path.size, k_path.size)
        self.assertEqual(k_path.size, c_path.size)
        # capital rises monotonically toward the steady state from below
        self.assertTrue(np.all(np.diff(k_path) >= 0.0))
        self.assertLess(k_path[-1], self.k_ss * 1.01)
        self.assertAlmostEqual(k_path[-1] / self.k_ss, 1.0, delta=0.02)

    def test_transition_bad_start(self):
        with self.assertRaises(ValueError):
            self.model.simulate_transition(10.0 * self.k_ss, T=10.0)


class testSteadyState(unittest.TestCase):
    def test_closed_form(self):
        model = NeoclassicalGrowthType()
        k_ss, c_ss = model.calc_steady_state()
        alpha, A = model.CapShare, model.TFP
        target = model.DiscRate + model.DeprFac
        self.assertAlmostEqual(k_ss, (alpha * A / target) ** (1.0 / (1.0 - alpha)))
        self.assertAlmostEqual(model.marginal_product(k_ss), target)
        self.assertAlmostEqual(c_ss, A * k_ss**alpha - model.DeprFac * k_ss)

    def test_numerical_root_matches(self):
        model = NeoclassicalGrowthType(TFP=1.3, CapShare=0.4)
        k_analytic, c_analytic = model.calc_steady_state()
        k_numeric, c_numeric = model.calc_steady_state(analytic=False)
        self.assertAlmostEqual(k_numeric, k_analytic, places=6)
        self.assertAlmostEqual(c_numeric, c_analytic, places=6)


class testRestrictions(unittest.TestCase):
    def test_bad_parameters(self):
        for kwds in [
            {"DiscRate": 0.0},
            {"DeprFac": -0.1},
            {"CRRA": -1.0},
            {"CapShare": 1.0},
            {"TFP": 0.0},
            {"kMinMult": 3.0},
        ]:
            with self.assertRaises(ValueError):
                NeoclassicalGrowthType(**kwds)

    def test_unsolved_model(self):
        model = NeoclassicalGrowthType(kCount=50)
        with self.assertRaises(ValueError):
            model.calc_savings()

    def test_log_utility(self):
        model = NeoclassicalGrowthType(CRRA=1.0, kCount=300)
        solution = model.solve()
        self.assertTrue(solution.converged)
        k_ss, _ = model.calc_steady_state()
        self.assertAlmostEqual(model.find_savings_root() / k_ss, 1.0, delta=0.02)
