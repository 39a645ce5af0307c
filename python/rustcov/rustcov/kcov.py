"""Argument builders for cargo and kcov, and test binary discovery."""

import os
from pathlib import Path

# cargo leaves dep-info and library artifacts next to the test binaries
_NON_BINARY_SUFFIXES = (".d", ".rlib", ".rmeta", ".so", ".dylib", ".dll", ".pdb")


def _is_test_binary(path):
    if path.suffix in _NON_BINARY_SUFFIXES:
        return False
    return path.is_file() and os.access(path, os.X_OK)


def find_group_binary(deps_dir, prefix):
    """Find the compiled test binary for a binary group.

    Cargo names test binaries ``<crate>-<hash>`` in ``target/debug/deps``.
    Stale builds leave several hashes behind, so the most recently modified
    executable matching ``<prefix>-*`` is returned.

    Args:
        deps_dir (Path): The cargo ``deps`` output directory.
        prefix (str): Crate name of the group, with ``-`` replaced by ``_``
            as cargo does for binary names.

    Returns:
        Path: The selected binary, or None if no executable matches.
    """
    deps_dir = Path(deps_dir)
    if not deps_dir.is_dir():
        return None
    candidates = [p for p in deps_dir.glob(f"{prefix}-*") if _is_test_binary(p)]
    if not candidates:
        return None
    return max(candidates, key=lambda p: p.stat().st_mtime)


def expand_patterns(patterns):
    return ",".join(os.path.expanduser(p) for p in patterns)


def build_cargo_args(settings):
    """Compile-only test build of the configured packages."""
    args = [settings.cargo, "test"]
    if settings.features:
        args += ["--features", ",".join(settings.features)]
    for package in settings.packages:
        args += ["-p", package]
    args.append("--no-run")
    return args


def build_kcov_args(settings, binary):
    """kcov invocation for one test binary.

    Every group shares the same pattern flags and output directory, so kcov
    merges the runs into a single report.
    """
    return [
        settings.kcov,
        "--exclude-pattern",
        expand_patterns(settings.exclude_patterns),
        "--include-pattern",
        expand_patterns(settings.include_patterns),
        "--verify",
        str(settings.coverage_dir),
        str(binary),
    ]
