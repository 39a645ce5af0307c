"""Command line entry point for rustcov.

Usage:
    rustcov                          # build, cover every group, open report
    rustcov --no-open                # leave the browser alone
    rustcov --group ethcore          # cover a subset of groups
    rustcov --best-effort            # ignore failed coverage runs
    rustcov --list                   # list configured groups
    rustcov --install-help           # how to build kcov
"""

import argparse
import sys

from rustcov import config
from rustcov.runner import run_coverage

INSTALL_HELP = """\
Installing kcov under Ubuntu

Install build dependencies:
  sudo apt-get install libcurl4-openssl-dev libelf-dev libdw-dev cmake gcc binutils-dev libiberty-dev

Compile and install kcov:
  wget https://github.com/SimonKagstrom/kcov/archive/master.tar.gz && tar xf master.tar.gz
  cd kcov-master && mkdir build && cd build
  cmake .. && make && sudo make install

Background: https://users.rust-lang.org/t/tutorial-how-to-collect-test-coverages-for-rust-project/650
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rustcov",
        description="Collect kcov line coverage for the workspace test binaries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--project-root",
        help="Cargo workspace root (default: $RUSTCOV_PROJECT_ROOT or current directory)",
    )
    parser.add_argument(
        "--group",
        dest="groups",
        action="append",
        metavar="NAME",
        help="Binary group to cover, may be repeated (default: all)",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Do not open the HTML report when done",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        default=None,
        help="Do not fail when individual coverage runs fail",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List configured binary groups",
    )
    parser.add_argument(
        "--install-help",
        action="store_true",
        help="Print instructions for building kcov",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.install_help:
        print(INSTALL_HELP)
        return 0

    if args.list:
        print("Binary groups:")
        for group in config.BINARY_GROUPS:
            print(f"  {group}")
        return 0

    try:
        settings = config.CoverageSettings.from_env(
            project_root=args.project_root,
            groups=args.groups,
            best_effort=args.best_effort,
        )
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        return run_coverage(settings, open_report_when_done=not args.no_open)
    except KeyboardInterrupt:
        print("\nCoverage run interrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
