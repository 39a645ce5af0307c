#!/bin/python3
"""Run Rust code coverage using kcov"""
import os
import pathlib
import sys

from rustcov.cli import main

repo_root = pathlib.Path(__file__).parent.parent.absolute()

if __name__ == "__main__":
    os.environ.setdefault("RUSTCOV_PROJECT_ROOT", str(repo_root))
    sys.exit(main())
