import unittest

from svinst.collector import collect
from svinst.errors import DuplicateModule, UnresolvedPort
from svinst.model import InstanceRecord

from syntax_fixtures import (
    module,
    non_ansi_list,
    port_decl,
    sample_case1,
    sample_case2,
    sample_unit,
    unit,
)


class TestCollect(unittest.TestCase):
    def test_sample_file(self):
        modules = collect(sample_unit(), "sample.sv")
        self.assertEqual([m.name for m in modules], ["case1", "case2"])

        case1, case2 = modules
        self.assertEqual([p.width for p in case1.ports], [1, 1, 32, 8, 1])
        self.assertEqual([p.width for p in case2.ports], [1, 1, 16, 4, 1])
        self.assertEqual(
            list(case1.instances),
            [InstanceRecord("case2", "c2a"), InstanceRecord("case2", "c2b")],
        )
        self.assertEqual(case2.instances, ())

    def test_modules_keep_source_order(self):
        names = ["zeta", "alpha", "mid", "beta"]
        modules = collect(unit(*[module(n) for n in names]))
        self.assertEqual([m.name for m in modules], names)

    def test_module_without_ports(self):
        (mod,) = collect(unit(module("tb")))
        self.assertEqual(mod.ports, ())
        self.assertEqual(mod.instances, ())

    def test_non_module_declarations_are_skipped(self):
        modules = collect(
            unit(
                module("pkg", kind="PackageDeclaration"),
                sample_case2(),
                module("bus_if", kind="InterfaceDeclaration"),
                module("prog", kind="ProgramDeclaration"),
                sample_case1(),
            )
        )
        self.assertEqual([m.name for m in modules], ["case2", "case1"])

    def test_empty_unit(self):
        self.assertEqual(collect(unit()), [])

    def test_errors_carry_file_and_module(self):
        broken = module("broken", non_ansi_list("a", "b"), [port_decl("input", ["a"])])
        with self.assertRaises(UnresolvedPort) as ctx:
            collect(unit(sample_case1(), broken), "rtl/broken.sv")
        err = ctx.exception
        self.assertEqual(err.file_path, "rtl/broken.sv")
        self.assertEqual(err.module_name, "broken")
        self.assertEqual(err.port_name, "b")
        self.assertTrue(str(err).startswith("rtl/broken.sv: module 'broken': port 'b': "))

    def test_duplicate_module(self):
        with self.assertRaises(DuplicateModule) as ctx:
            collect(unit(module("dup"), module("dup")), "a.sv")
        self.assertEqual(ctx.exception.module_name, "dup")
        self.assertEqual(ctx.exception.file_path, "a.sv")


if __name__ == "__main__":
    unittest.main()
