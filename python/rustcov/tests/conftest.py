import os
import subprocess

import pytest

from rustcov.config import BINARY_GROUPS, CoverageSettings


def make_binary(deps_dir, name, mtime=None):
    path = deps_dir / name
    path.write_bytes(b"\x7fELF")
    path.chmod(0o755)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture(name="make_binary")
def make_binary_fixture():
    return make_binary


@pytest.fixture
def workspace(tmp_path):
    """A cargo workspace whose deps dir holds one test binary per group."""
    deps_dir = tmp_path / "target" / "debug" / "deps"
    deps_dir.mkdir(parents=True)
    for group in BINARY_GROUPS:
        make_binary(deps_dir, f"{group}-0123456789abcdef")
        (deps_dir / f"{group}-0123456789abcdef.d").write_text("deps\n")
    return tmp_path


@pytest.fixture
def settings(workspace):
    return CoverageSettings(workspace)


class FakeProcesses:
    """Stand-in for subprocess.run that records every command line."""

    def __init__(self, cargo_status=0, kcov_status=None, write_report=True):
        self.calls = []
        self.cargo_status = cargo_status
        self.kcov_status = kcov_status or {}
        self.write_report = write_report

    def __call__(self, args, cwd=None, check=False):
        self.calls.append(list(args))
        if args[0] == "cargo":
            return subprocess.CompletedProcess(args, self.cargo_status)
        output_dir = args[-2]
        binary = os.path.basename(args[-1])
        if self.write_report:
            with open(os.path.join(output_dir, "index.html"), "w") as f:
                f.write("<html></html>")
        group = binary.rsplit("-", 1)[0]
        return subprocess.CompletedProcess(args, self.kcov_status.get(group, 0))

    @property
    def cargo_calls(self):
        return [c for c in self.calls if c[0] == "cargo"]

    @property
    def kcov_calls(self):
        return [c for c in self.calls if c[0] == "kcov"]


@pytest.fixture
def fake_processes():
    return FakeProcesses()


@pytest.fixture
def fake_processes_factory():
    return FakeProcesses
