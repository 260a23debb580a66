import unittest

import numpy as np
import pytest

from gridbayes.core.module import Module, InputSpec


@pytest.mark.usefixtures("prefect_backend")
class TestModule(unittest.TestCase):

    def setUp(self):
        self.mod = Module()

        def scale(x: np.ndarray, factor: float = 2.0):
            return x * factor

        self.mod.run_func(scale)

    def test_register_run_func_and_duplicate(self):
        self.assertIn('scale', self.mod._run_funcs)
        self.assertTrue(hasattr(self.mod, 'scale'))

        def scale(x):
            return x

        with self.assertRaises(RuntimeError):
            self.mod.run_func(scale)  # duplicate by same name

    def test_automatic_input_detection(self):
        specs = self.mod._inputs_for_run['scale']
        self.assertIn('x', specs)
        self.assertIn('factor', specs)
        self.assertTrue(specs['x']['required'])
        self.assertEqual(specs['factor']['default'], 2.0)
        self.assertIs(specs['x']['type'], np.ndarray)

    def test_run_function_execution(self):
        out = self.mod.scale(x=np.array([1.0, 2.0]))
        np.testing.assert_allclose(out, [2.0, 4.0])

        out = self.mod.scale(x=np.array([1.0, 2.0]), factor=3)
        np.testing.assert_allclose(out, [3.0, 6.0])

    def test_set_input_overrides_default(self):
        self.mod.set_input(factor=10.0)
        out = self.mod.scale(x=np.array([1.0]))
        np.testing.assert_allclose(out, [10.0])

    def test_set_input_default_for_required_parameter(self):
        self.mod.set_input(x=InputSpec(type=np.ndarray, default=np.array([5.0])))
        np.testing.assert_allclose(self.mod.scale(), [10.0])

    def test_run_missing_input_raises(self):
        with self.assertRaises(TypeError):
            self.mod.scale()  # x missing

    def test_run_unknown_input_raises(self):
        with self.assertRaises(TypeError):
            self.mod.scale(x=np.array([1.0]), offset=1.0)

    def test_run_wrong_type_raises(self):
        with self.assertRaises(TypeError):
            self.mod.scale(x=[1.0, 2.0])
        with self.assertRaises(TypeError):
            self.mod.scale(x=np.array([1.0]), factor="big")

    def test_flow_registration(self):
        mod = Module()

        def total(values: np.ndarray):
            return float(np.sum(values))

        mod.run_func(total, as_task=False)
        self.assertEqual(mod.total(values=np.arange(4.0)), 6.0)

    def test_repr_and_str(self):
        self.mod.set_input(factor=1.0)

        r = repr(self.mod)
        self.assertIn('factor', r)
        self.assertIn('scale', r)

        s = str(self.mod)
        self.assertIn('Inputs:', s)
        self.assertIn('Run Functions:', s)


if __name__ == "__main__":
    unittest.main()
