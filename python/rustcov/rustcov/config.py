"""Configuration for rustcov coverage runs.

Defaults describe the workspace layout and the fixed package, feature and
binary group lists. ``RUSTCOV_*`` environment variables override them, and
explicit keyword overrides (from the command line) override the environment.
"""

import os
from pathlib import Path

TEST_FEATURES = ["ethcore/json-tests"]
TEST_PACKAGES = [
    "ethash",
    "ethcore-util",
    "ethcore",
    "ethsync",
    "ethcore-rpc",
    "parity",
]

# binary name prefixes under target/debug/deps, one kcov run each
BINARY_GROUPS = [
    "ethcore",
    "ethash",
    "ethcore_util",
    "ethsync",
    "ethcore_rpc",
]

EXCLUDE_PATTERNS = ["~/.multirust", "rocksdb", "secp256k1"]
INCLUDE_PATTERNS = ["src"]

COVERAGE_DIR = Path("target") / "coverage"
DEPS_DIR = Path("target") / "debug" / "deps"
REPORT_FILE = "index.html"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(value):
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


class CoverageSettings:
    """Resolved settings for a single coverage run.

    Args:
        project_root (Path): Root of the cargo workspace. Relative output and
            deps paths are resolved against it.
        kcov (str): kcov executable name or path.
        cargo (str): cargo executable name or path.
        groups (list[str], optional): Binary groups to cover, in order.
            Defaults to every configured group.
        best_effort (bool): When True, failed coverage runs do not affect
            the exit status.
    """

    def __init__(
        self,
        project_root,
        kcov="kcov",
        cargo="cargo",
        groups=None,
        best_effort=False,
        features=None,
        packages=None,
        exclude_patterns=None,
        include_patterns=None,
    ):
        self.project_root = Path(project_root).absolute()
        self.kcov = kcov
        self.cargo = cargo
        self.groups = list(BINARY_GROUPS if groups is None else groups)
        self.best_effort = best_effort
        self.features = list(TEST_FEATURES if features is None else features)
        self.packages = list(TEST_PACKAGES if packages is None else packages)
        self.exclude_patterns = list(
            EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns
        )
        self.include_patterns = list(
            INCLUDE_PATTERNS if include_patterns is None else include_patterns
        )

    @property
    def coverage_dir(self):
        return self.project_root / COVERAGE_DIR

    @property
    def deps_dir(self):
        return self.project_root / DEPS_DIR

    @property
    def report_path(self):
        return self.coverage_dir / REPORT_FILE

    @classmethod
    def from_env(cls, environ=None, **overrides):
        """Build settings from the environment and explicit overrides.

        Recognized variables are ``RUSTCOV_PROJECT_ROOT``, ``RUSTCOV_KCOV``,
        ``RUSTCOV_CARGO`` and ``RUSTCOV_BEST_EFFORT``. Overrides whose value
        is None are ignored, so unset command line options fall through to
        the environment.

        Raises:
            RuntimeError: If the project root is not a directory, the group
                selection is empty or a requested group is not configured.
        """
        if environ is None:
            environ = os.environ
        overrides = {k: v for k, v in overrides.items() if v is not None}

        project_root = overrides.pop(
            "project_root", environ.get("RUSTCOV_PROJECT_ROOT") or os.getcwd()
        )
        if not Path(project_root).is_dir():
            raise RuntimeError(f"project root is not a directory: '{project_root}'")

        groups = overrides.pop("groups", None)
        if groups is not None:
            if not groups:
                raise RuntimeError("no groups selected")
            unknown = [g for g in groups if g not in BINARY_GROUPS]
            if unknown:
                raise RuntimeError(
                    f"unknown group(s): {', '.join(unknown)}. Available: {', '.join(BINARY_GROUPS)}"
                )

        if "best_effort" in overrides:
            best_effort = overrides.pop("best_effort")
        else:
            best_effort = _env_flag(environ.get("RUSTCOV_BEST_EFFORT"))

        return cls(
            project_root,
            kcov=overrides.pop("kcov", environ.get("RUSTCOV_KCOV") or "kcov"),
            cargo=overrides.pop("cargo", environ.get("RUSTCOV_CARGO") or "cargo"),
            groups=groups,
            best_effort=best_effort,
            **overrides,
        )
