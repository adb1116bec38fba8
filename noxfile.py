"""Nox automation sessions for ttc_headsigns."""

from __future__ import annotations

import nox

nox.options.sessions = ("lint", "typecheck", "tests")
nox.options.reuse_existing_virtualenvs = True


def _install_project(session: nox.Session, extra: str | None = None) -> None:
    session.install("-e", f".[{extra}]" if extra else ".")


@nox.session()
def lint(session: nox.Session) -> None:
    session.install("black", "flake8")
    session.run("black", "--check", "--line-length", "100", "ttc_headsigns", "tests")
    session.run("flake8", "--max-line-length", "100", "ttc_headsigns", "tests")


@nox.session()
def typecheck(session: nox.Session) -> None:
    session.install("mypy", "types-PyYAML")
    _install_project(session)
    session.run("mypy", "ttc_headsigns")


@nox.session()
def tests(session: nox.Session) -> None:
    _install_project(session, "test")
    session.run("pytest", "tests")
