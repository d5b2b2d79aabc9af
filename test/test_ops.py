#!/usr/bin/env python3
import math
import os
import tempfile
import unittest

from rangetree.config import load_config
from rangetree.ops import (
    format_value,
    get_operator,
    make_modsum,
    make_operator,
    Operator,
    operator_names,
    parse_set,
)


class OperatorTest(unittest.TestCase):
    def test_builtins(self) -> None:
        for name in ("max", "min", "sum", "modsum", "gcd", "union"):
            self.assertIn(name, operator_names())
        self.assertEqual(-math.inf, get_operator("max").default)
        self.assertEqual(math.inf, get_operator("min").default)
        self.assertEqual(frozenset(), get_operator("union").default)
        self.assertTrue(get_operator("max").idempotent)
        self.assertFalse(get_operator("sum").idempotent)

    def test_unknown(self) -> None:
        with self.assertRaises(KeyError):
            get_operator("xor")
        with self.assertRaises(ValueError):
            make_operator("foo", "xor")

    def test_check(self) -> None:
        samples = [-3, 0, 5, 10 ** 12]
        for name in ("max", "min", "sum"):
            get_operator(name).check(samples)
        get_operator("gcd").check([0, 4, 9])
        get_operator("union").check([frozenset(), frozenset({1, 2})])
        bad = Operator("bad_max", max, 0)
        with self.assertRaises(ValueError):
            bad.check([-1])

    def test_modsum(self) -> None:
        modsum = make_modsum("mod7", 7)
        tree = modsum.make_tree(3)
        tree.update(1, 5)
        tree.update(2, 4)
        tree.update(3, 6)
        self.assertEqual(2, tree.query(1, 2))
        self.assertEqual(1, tree.query(1, 3))
        with self.assertRaises(ValueError):
            make_modsum("mod0", 0)

    def test_parse_and_format(self) -> None:
        union = get_operator("union")
        self.assertEqual(frozenset({1, 2, 16}), union.parse("2,1,0x10"))
        self.assertEqual(frozenset(), parse_set("-"))
        self.assertEqual("1,2,16", format_value(frozenset({16, 2, 1})))
        self.assertEqual("-", format_value(frozenset()))
        self.assertEqual(255, get_operator("max").parse("0xff"))
        self.assertEqual("-inf", format_value(-math.inf))

    def test_make_tree(self) -> None:
        tree = get_operator("max").make_tree(4, lazy=True)
        self.assertTrue(tree.lazy)
        tree.update_range(2, 3, 9)
        self.assertEqual(9, tree.query(1, 4))
        self.assertEqual(-math.inf, tree.query(4, 4))


class ConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self.workdir = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.workdir.cleanup()

    def write_config(self, text: str) -> str:
        path = os.path.join(self.workdir.name, "rangetree.ini")
        with open(path, "w") as fp:
            fp.write(text)
        return path

    def test_defaults(self) -> None:
        config = load_config()
        self.assertIsNone(config.size)
        self.assertEqual("max", config.operator)
        self.assertTrue(config.lazy)

    def test_tree_and_operators(self) -> None:
        path = self.write_config(
            "[tree]\n"
            "size = 8\n"
            "operator = mod5\n"
            "lazy = no\n"
            "\n"
            "[operator.mod5]\n"
            "kind = modsum\n"
            "modulus = 5\n"
            "\n"
            "[operator.lowest]\n"
            "kind = min\n"
        )
        config = load_config(path)
        self.assertEqual(8, config.size)
        self.assertEqual("mod5", config.operator)
        self.assertFalse(config.lazy)
        mod5 = config.get_operator("mod5")
        self.assertEqual(3, mod5.op(4, 4))
        self.assertEqual(math.inf, config.get_operator("lowest").default)
        self.assertEqual(-math.inf, config.get_operator("max").default)
        self.assertIn("mod5", config.operator_names())
        self.assertIn("max", config.operator_names())
        # The built-in catalog is not extended by loading a file
        with self.assertRaises(KeyError):
            get_operator("mod5")
        self.assertNotIn("lowest", operator_names())

    def test_operators_are_per_config(self) -> None:
        text = "[operator.m]\nkind = modsum\nmodulus = {}\n"
        first = load_config(self.write_config(text.format(5)))
        second = load_config(self.write_config(text.format(7)))
        self.assertEqual(1, first.get_operator("m").op(3, 3))
        self.assertEqual(6, second.get_operator("m").op(3, 3))
        with self.assertRaises(KeyError):
            load_config().get_operator("m")

    def test_builtin_redefinition(self) -> None:
        for name in ("max", "sum"):
            path = self.write_config(f"[operator.{name}]\nkind = min\n")
            with self.assertRaises(RuntimeError):
                load_config(path)
        self.assertEqual(-math.inf, get_operator("max").default)
        self.assertTrue(get_operator("max").idempotent)

    def test_unsupported_section(self) -> None:
        path = self.write_config("[trees]\nsize = 8\n")
        with self.assertRaises(RuntimeError):
            load_config(path)

    def test_modulus_on_wrong_kind(self) -> None:
        path = self.write_config("[operator.x]\nkind = max\nmodulus = 3\n")
        with self.assertRaises(RuntimeError):
            load_config(path)


if __name__ == "__main__":
    unittest.main()
