import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import MagicMock, patch

import svinst_port
from svinst.errors import ParseError, UnresolvedPort
from svinst.model import CompilationResult, Direction, FileResult, ModuleRecord, PortRecord


def _result(failures=()):
    mod = ModuleRecord("top", ports=(PortRecord("clk", Direction.INPUT),))
    return CompilationResult(files=[FileResult("top.sv", (mod,))], failures=list(failures))


class TestArgParser(unittest.TestCase):
    def test_no_arguments_is_usage_error(self):
        buf = io.StringIO()
        with redirect_stderr(buf), self.assertRaises(SystemExit) as ctx:
            svinst_port.main([])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("usage:", buf.getvalue())

    def test_defaults(self):
        args = svinst_port.build_arg_parser().parse_args(["a.sv", "b.sv"])
        self.assertEqual(args.files, ["a.sv", "b.sv"])
        self.assertEqual(args.format, "yaml")
        self.assertEqual(args.policy, "strict")
        self.assertEqual(args.jobs, 1)
        self.assertEqual(args.define, [])
        self.assertEqual(args.include, [])
        self.assertFalse(args.ignore_include)
        self.assertFalse(args.full_tree)

    def test_repeated_defines_and_includes(self):
        args = svinst_port.build_arg_parser().parse_args(
            ["-d", "WIDTH=8", "--define", "SIM", "-i", "inc", "--include", "rtl/inc", "a.sv"]
        )
        self.assertEqual(args.define, ["WIDTH=8", "SIM"])
        self.assertEqual(args.include, ["inc", "rtl/inc"])

    def test_include_and_tree_flags(self):
        args = svinst_port.build_arg_parser().parse_args(["--ignore-include", "--full-tree", "a.sv"])
        self.assertTrue(args.ignore_include)
        self.assertTrue(args.full_tree)

    def test_bad_jobs_is_usage_error(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            svinst_port.main(["-j", "0", "a.sv"])
        self.assertEqual(ctx.exception.code, 2)


class TestExtractCommand(unittest.TestCase):
    @patch("svinst_port.SlangTreeProvider")
    @patch("svinst_port.process")
    def test_success_prints_yaml(self, mock_process, mock_provider_cls):
        mock_process.return_value = _result()

        buf = io.StringIO()
        with redirect_stdout(buf):
            rc = svinst_port.main(["-d", "SIM", "-i", "inc", "--policy", "keep-going", "-j", "2", "top.sv"])

        self.assertEqual(rc, 0)
        mock_provider_cls.assert_called_once_with(include_dirs=["inc"], defines=["SIM"], ignore_include=False)
        mock_process.assert_called_once_with(
            ["top.sv"], provider=mock_provider_cls.return_value, policy="keep-going", jobs=2, full_tree=False
        )
        output = buf.getvalue()
        self.assertIn("files:", output)
        self.assertIn("mod_name: top", output)
        self.assertIn("port_dir: input", output)

    @patch("svinst_port.SlangTreeProvider")
    @patch("svinst_port.process")
    def test_full_tree_replaces_defs(self, mock_process, mock_provider_cls):
        tree = [{"CompilationUnit": [{"Token": "endmodule", "Line": 3}]}]
        mock_process.return_value = CompilationResult(files=[FileResult("top.sv", syntax_tree=tree)])

        buf = io.StringIO()
        with redirect_stdout(buf):
            rc = svinst_port.main(["--ignore-include", "--full-tree", "top.sv"])

        self.assertEqual(rc, 0)
        mock_provider_cls.assert_called_once_with(include_dirs=[], defines=[], ignore_include=True)
        self.assertTrue(mock_process.call_args.kwargs["full_tree"])
        output = buf.getvalue()
        self.assertIn("syntax_tree:", output)
        self.assertIn("Token: endmodule", output)
        self.assertNotIn("defs:", output)

    @patch("svinst_port.SlangTreeProvider", MagicMock())
    @patch("svinst_port.process")
    def test_markdown_format(self, mock_process):
        mock_process.return_value = _result()

        buf = io.StringIO()
        with redirect_stdout(buf):
            rc = svinst_port.main(["--format", "markdown", "top.sv"])

        self.assertEqual(rc, 0)
        self.assertIn("## Module top", buf.getvalue())

    @patch("svinst_port.SlangTreeProvider", MagicMock())
    @patch("svinst_port.process")
    def test_strict_failure_returns_nonzero(self, mock_process):
        mock_process.side_effect = ParseError("parse failed", file_path="bad.sv")

        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = svinst_port.main(["bad.sv"])

        self.assertEqual(rc, 1)
        self.assertEqual(out.getvalue(), "")
        self.assertIn("error: bad.sv: parse failed", err.getvalue())

    @patch("svinst_port.SlangTreeProvider", MagicMock())
    @patch("svinst_port.process")
    def test_keep_going_prints_partial_result_and_errors(self, mock_process):
        failure = UnresolvedPort("no direction", file_path="bad.sv", module_name="m", port_name="p")
        mock_process.return_value = _result(failures=[failure])

        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = svinst_port.main(["--policy", "keep-going", "top.sv", "bad.sv"])

        self.assertEqual(rc, 1)
        self.assertIn("mod_name: top", out.getvalue())
        self.assertIn("error: bad.sv: module 'm': port 'p': no direction", err.getvalue())


if __name__ == "__main__":
    unittest.main()
