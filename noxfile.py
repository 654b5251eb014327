"""
Nox sessions for nistbeacon.

Sessions:
  - lint : ruff + black (check)
  - tests: the test suite on each supported interpreter

Pass extra args to pytest like:
  nox -s tests -- -k "staleness" -vv
"""

from __future__ import annotations

import nox

# Reuse envs to speed up local iteration
nox.options.reuse_venv = True
nox.options.sessions = ["lint", "tests"]

PY_PATHS = ["nistbeacon", "noxfile.py"]
TEST_PYTHONS = ["3.10", "3.11", "3.12"]


@nox.session(name="lint", python="3.11")
def lint(session: nox.Session) -> None:
    """Static analysis: ruff, black (check)."""
    session.install("ruff>=0.6.0", "black>=24.3.0")
    session.run("ruff", "check", *PY_PATHS)
    session.run("black", "--check", *PY_PATHS)


@nox.session(name="tests", python=TEST_PYTHONS)
def tests(session: nox.Session) -> None:
    """Unit tests; the beacon is faked, nothing leaves the machine."""
    session.env.setdefault("PYTHONUNBUFFERED", "1")
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)
