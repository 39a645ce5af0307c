"""Run kcov over a cargo workspace's test binaries.

The run is strictly sequential:

1. check that kcov is installed,
2. compile the tests without running them (``cargo test --no-run``),
3. create the coverage output directory,
4. run kcov once per binary group into that shared directory,
5. print a summary and open the merged HTML report.

A missing kcov or a failed build stops the run immediately. Failed coverage
runs never stop the later groups. They count against the exit status
unless ``best_effort`` is set.
"""

import sys

from rustcov.command import find_tool, run_command
from rustcov.kcov import build_cargo_args, build_kcov_args, find_group_binary
from rustcov.report import CoverageRun, open_report, print_summary

MISSING_KCOV_MESSAGE = (
    "Install kcov first (run with --install-help for details). Aborting."
)


def _banner(title):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def run_group(settings, group):
    """Run kcov for a single binary group and return its CoverageRun"""
    binary = find_group_binary(settings.deps_dir, group)
    if binary is None:
        print(f"⚠️  No test binary matching '{group}-*' in {settings.deps_dir}")
        return CoverageRun(group, None, None)
    returncode = run_command(build_kcov_args(settings, binary), settings.project_root)
    if returncode != 0:
        print(f"❌ kcov failed for {group} (exit code {returncode})")
    return CoverageRun(group, binary, returncode)


def run_coverage(settings, open_report_when_done=True, best_effort=None):
    """Run the whole coverage pipeline.

    Args:
        settings (CoverageSettings): Resolved configuration.
        open_report_when_done (bool): Open ``index.html`` in the default
            browser at the end.
        best_effort (bool, optional): Overrides ``settings.best_effort``.

    Returns:
        int: Process exit status. 1 if kcov is missing, the cargo status if
        the build fails, 1 if any coverage run failed (unless best effort)
        or the report could not be opened, 0 otherwise.
    """
    if best_effort is None:
        best_effort = settings.best_effort

    if find_tool(settings.kcov) is None:
        print(MISSING_KCOV_MESSAGE, file=sys.stderr)
        return 1

    steps = len(settings.groups) + 1

    _banner(f"Step 1/{steps}: Building test binaries")
    returncode = run_command(build_cargo_args(settings), settings.project_root)
    if returncode != 0:
        print(f"❌ Test build failed (exit code {returncode})", file=sys.stderr)
        return returncode

    settings.coverage_dir.mkdir(parents=True, exist_ok=True)

    runs = []
    for index, group in enumerate(settings.groups, start=2):
        _banner(f"Step {index}/{steps}: Coverage for {group}")
        runs.append(run_group(settings, group))

    print_summary(runs, settings.coverage_dir)

    status = 0
    failed = [run for run in runs if not run.succeeded]
    if failed:
        names = ", ".join(run.group for run in failed)
        if best_effort:
            print(f"⚠️  Ignoring failed coverage runs: {names}")
        else:
            print(f"❌ Coverage failed for: {names}", file=sys.stderr)
            status = 1

    if open_report_when_done:
        if not open_report(settings.report_path):
            status = 1
    else:
        print(f"Report: {settings.report_path}")

    if status == 0:
        print("\n✅ Coverage run completed successfully!")
    return status
