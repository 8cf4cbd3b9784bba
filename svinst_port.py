import argparse
import logging
import sys

from svinst.errors import ExtractionError
from svinst.pipeline import process
from svinst.renderers import renderer_registry
from svinst.slang_backend import SlangTreeProvider
from svinst.strategy import DEFAULT_POLICY, policy_registry


def cmd_extract(args: argparse.Namespace) -> int:
    """Extract module definitions and print them in the selected format.

    The failure policy is selected with ``--policy`` and the output
    format with ``--format``; both use registries for extensibility.
    Returns 1 if any file failed, 0 otherwise.
    """
    provider = SlangTreeProvider(
        include_dirs=args.include,
        defines=args.define,
        ignore_include=args.ignore_include,
    )

    try:
        result = process(
            args.files,
            provider=provider,
            policy=args.policy,
            jobs=args.jobs,
            full_tree=args.full_tree,
        )
    except ExtractionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ImportError as exc:
        sys.exit(f"Error: {exc}")

    renderer = renderer_registry.create(args.format)
    sys.stdout.write(renderer.render(result))

    for failure in result.failures:
        print(f"error: {failure}", file=sys.stderr)
    return 0 if result.ok else 1


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svinst-port",
        description="Extract module definitions, ports and instances from SystemVerilog files.",
    )
    parser.add_argument(
        "files",
        metavar="FILE",
        nargs="+",
        help="SystemVerilog files to parse.",
    )
    parser.add_argument(
        "-d",
        "--define",
        metavar="NAME[=VALUE]",
        action="append",
        default=[],
        help="Preprocessor define (may be repeated).",
    )
    parser.add_argument(
        "-i",
        "--include",
        metavar="DIR",
        action="append",
        default=[],
        help="Include directory (may be repeated).",
    )
    parser.add_argument(
        "--ignore-include",
        action="store_true",
        help="Do not fail on `include files that cannot be found.",
    )
    parser.add_argument(
        "--full-tree",
        action="store_true",
        help="Print each file's full syntax tree instead of its modules.",
    )
    parser.add_argument(
        "--format",
        choices=renderer_registry.keys(),
        default="yaml",
        help="Output format (default: yaml).",
    )
    parser.add_argument(
        "--policy",
        choices=policy_registry.keys(),
        default=DEFAULT_POLICY,
        help=f"What to do when a file fails (default: {DEFAULT_POLICY}).",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of files processed in parallel (default: 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )
    parser.set_defaults(func=cmd_extract)
    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
