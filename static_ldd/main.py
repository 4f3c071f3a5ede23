#!/usr/bin/env python3
import argparse
import sys

from static_ldd import report
from static_ldd.errors import DependencyError
from static_ldd.export import export_dependencies
from static_ldd.ld_conf import DEFAULT_LD_CONF
from static_ldd.ldd import get_dependencies
from static_ldd.log import setup_logging
from static_ldd.search_path import SearchPathConfig


def build_parser():
    parser = argparse.ArgumentParser(
        prog="static-ldd",
        description="List the shared libraries an ELF binary needs, without running it",
    )
    parser.add_argument("target", help="Path to the ELF binary")
    parser.add_argument(
        "-L", "--lib-path", default="",
        help="Colon separated list of library directories. If set, it is the only path",
    )
    parser.add_argument(
        "-p", "--prepend-lib-path", default="",
        help="Colon separated list of directories searched before the defaults",
    )
    parser.add_argument(
        "-a", "--append-lib-path", default="",
        help="Colon separated list of directories searched after the defaults",
    )
    parser.add_argument(
        "--ld-conf", default=DEFAULT_LD_CONF,
        help="ld.so.conf file appended to the search path (empty to skip)",
    )
    parser.add_argument("--tree", action="store_true", help="Print a dependency tree")
    parser.add_argument("--json", metavar="OUT", help="Write a JSON report to OUT")
    parser.add_argument(
        "--export", metavar="DIR",
        help="Copy the target and every library found into DIR",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    parser.add_argument("--debug", action="store_true", help="Log every scanned file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = "DEBUG" if args.debug else "INFO" if args.verbose else None
    setup_logging(level)

    config = SearchPathConfig(
        override_path=args.lib_path,
        prepend_path=args.prepend_lib_path,
        append_path=args.append_lib_path,
        ld_conf=args.ld_conf,
    )

    try:
        resolution = get_dependencies(args.target, config)
    except DependencyError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(report.format_search_path(resolution.search_path))

    if args.tree:
        print(report.format_tree(resolution.graph))

    if args.json:
        try:
            report.write_json(resolution, args.json)
        except OSError as e:
            print(f"[ERROR] Cannot write output JSON: {e}", file=sys.stderr)
            return 1
        print(f"[+] Report written to {args.json}")

    if args.export:
        try:
            export_dependencies(resolution, args.export)
        except OSError as e:
            print(f"[ERROR] Export failed: {e}", file=sys.stderr)
            return 1
        return 0

    if not args.tree:
        print(report.format_listing(resolution))

    return 0


if __name__ == "__main__":
    sys.exit(main())
