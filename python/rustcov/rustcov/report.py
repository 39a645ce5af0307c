"""Console summary of coverage runs and access to the kcov HTML report."""

import json
import webbrowser

from tabulate import tabulate

STATUS_OK = "ok"
STATUS_FAILED = "failed"
STATUS_MISSING = "missing"

MERGED_SUMMARY = "kcov-merged/coverage.json"


class CoverageRun:
    """Outcome of the kcov run for one binary group."""

    def __init__(self, group, binary, returncode):
        self.group = group
        self.binary = binary
        self.returncode = returncode

    @property
    def status(self):
        if self.binary is None:
            return STATUS_MISSING
        if self.returncode != 0:
            return STATUS_FAILED
        return STATUS_OK

    @property
    def succeeded(self):
        return self.status == STATUS_OK

    def __repr__(self):
        return f"CoverageRun({self.group!r}, {self.binary!r}, {self.returncode!r})"


def format_runs(runs):
    rows = [
        [
            run.group,
            run.binary.name if run.binary is not None else "-",
            run.status,
            "-" if run.returncode is None else run.returncode,
        ]
        for run in runs
    ]
    return tabulate(
        rows, headers=["group", "binary", "status", "exit code"], tablefmt="simple"
    )


def read_merged_summary(coverage_dir):
    """Read kcov's merged totals.

    Returns:
        dict: ``percent_covered``, ``covered_lines`` and ``total_lines``, or
        None when kcov did not write a merged summary.
    """
    path = coverage_dir / MERGED_SUMMARY
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return {
        "percent_covered": data.get("percent_covered"),
        "covered_lines": data.get("covered_lines"),
        "total_lines": data.get("total_lines"),
    }


def print_summary(runs, coverage_dir):
    print("\n" + "=" * 60)
    print("Coverage Summary")
    print("=" * 60)
    print(format_runs(runs))

    totals = read_merged_summary(coverage_dir)
    if totals is None or totals["percent_covered"] is None:
        print("\n(no merged kcov summary found)")
    else:
        print(
            f"\nTotal: {totals['percent_covered']}% "
            f"({totals['covered_lines']}/{totals['total_lines']} lines)"
        )


def open_report(report_path):
    """Open the HTML report in the default browser, returning True on success"""
    if not report_path.exists():
        print(f"⚠️  Report not found: {report_path}")
        return False
    print(f"🌐 Opening {report_path}")
    try:
        return webbrowser.open(report_path.as_uri())
    except webbrowser.Error as e:
        print(f"⚠️  Could not open browser: {e}")
        return False
