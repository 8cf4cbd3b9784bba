import unittest

from svinst.errors import ParseError, UnresolvedPort
from svinst.model import FileResult
from svinst.pipeline import aggregate, extract_file, process
from svinst.strategy import KeepGoingPolicy

from syntax_fixtures import (
    FakeProvider,
    module,
    non_ansi_list,
    sample_unit,
    unit,
)


class DumpingProvider(FakeProvider):
    def dump(self, path):
        if path not in self.trees:
            raise ParseError("parse failed", file_path=path)
        return [{"CompilationUnit": [{"Token": path, "Line": 1}]}]


class TestAggregate(unittest.TestCase):
    def test_aggregate_wraps_modules(self):
        result = aggregate("a.sv", [])
        self.assertEqual(result, FileResult("a.sv", ()))

    def test_extract_file(self):
        provider = FakeProvider({"sample.sv": sample_unit()})
        result = extract_file("sample.sv", provider)
        self.assertEqual(result.file_path, "sample.sv")
        self.assertEqual([m.name for m in result.modules], ["case1", "case2"])
        self.assertIsNotNone(result.get_module("case2"))

    def test_extract_file_full_tree(self):
        provider = DumpingProvider({"sample.sv": sample_unit()})
        result = extract_file("sample.sv", provider, full_tree=True)
        self.assertEqual(result.modules, ())
        self.assertEqual(result.syntax_tree, [{"CompilationUnit": [{"Token": "sample.sv", "Line": 1}]}])
        self.assertEqual(provider.parsed, [])


class TestProcess(unittest.TestCase):
    def setUp(self):
        self.trees = {
            "a.sv": unit(module("a")),
            "b.sv": sample_unit(),
            "c.sv": unit(module("c1"), module("c2")),
            "bad.sv": unit(module("bad", non_ansi_list("x"))),
        }

    def test_single_file_e2e(self):
        result = process(["b.sv"], provider=FakeProvider(self.trees))
        self.assertTrue(result.ok)
        self.assertEqual(len(result.files), 1)
        case1, case2 = result.files[0].modules
        self.assertEqual(case1.name, "case1")
        self.assertEqual(case2.name, "case2")
        self.assertEqual([p.width for p in case1.ports], [1, 1, 32, 8, 1])
        self.assertEqual([p.width for p in case2.ports], [1, 1, 16, 4, 1])
        self.assertEqual(
            [(i.module_name, i.instance_name) for i in case1.instances],
            [("case2", "c2a"), ("case2", "c2b")],
        )
        self.assertEqual(case2.instances, ())

    def test_files_keep_input_order(self):
        paths = ["c.sv", "a.sv", "b.sv"]
        result = process(paths, provider=FakeProvider(self.trees))
        self.assertEqual([f.file_path for f in result.files], paths)

    def test_parallel_files_keep_input_order(self):
        paths = ["c.sv", "a.sv", "b.sv", "a.sv"]
        result = process(paths, provider=FakeProvider(self.trees), jobs=3)
        self.assertEqual([f.file_path for f in result.files], paths)

    def test_strict_policy_aborts_on_parse_error(self):
        provider = FakeProvider(self.trees)
        with self.assertRaises(ParseError) as ctx:
            process(["a.sv", "missing.sv", "c.sv"], provider=provider)
        self.assertEqual(ctx.exception.file_path, "missing.sv")
        self.assertEqual(provider.parsed, ["a.sv", "missing.sv"])

    def test_strict_policy_aborts_on_resolution_error(self):
        with self.assertRaises(UnresolvedPort) as ctx:
            process(["bad.sv", "a.sv"], provider=FakeProvider(self.trees), policy="strict")
        self.assertEqual(ctx.exception.file_path, "bad.sv")

    def test_strict_policy_in_parallel_reports_first_failure(self):
        with self.assertRaises(ParseError) as ctx:
            process(["a.sv", "missing.sv", "bad.sv"], provider=FakeProvider(self.trees), jobs=2)
        self.assertEqual(ctx.exception.file_path, "missing.sv")

    def test_keep_going_policy_omits_failed_files(self):
        result = process(
            ["a.sv", "missing.sv", "bad.sv", "c.sv"],
            provider=FakeProvider(self.trees),
            policy="keep-going",
        )
        self.assertFalse(result.ok)
        self.assertEqual([f.file_path for f in result.files], ["a.sv", "c.sv"])
        self.assertEqual([e.file_path for e in result.failures], ["missing.sv", "bad.sv"])

    def test_policy_instance_accepted(self):
        result = process(["missing.sv"], provider=FakeProvider(self.trees), policy=KeepGoingPolicy())
        self.assertEqual(result.files, [])
        self.assertEqual(len(result.failures), 1)

    def test_failure_does_not_leak_into_other_files(self):
        result = process(["bad.sv", "a.sv"], provider=FakeProvider(self.trees), policy="keep-going")
        self.assertEqual(result.files[0].modules[0].name, "a")

    def test_full_tree_keeps_order_and_policy(self):
        provider = DumpingProvider(self.trees)
        result = process(["c.sv", "missing.sv", "a.sv"], provider=provider, policy="keep-going", full_tree=True)
        self.assertEqual([f.file_path for f in result.files], ["c.sv", "a.sv"])
        self.assertEqual(result.files[1].syntax_tree[0]["CompilationUnit"][0]["Token"], "a.sv")
        self.assertEqual([e.file_path for e in result.failures], ["missing.sv"])

    def test_unknown_policy(self):
        with self.assertRaises(KeyError):
            process(["a.sv"], provider=FakeProvider(self.trees), policy="nope")


if __name__ == "__main__":
    unittest.main()
