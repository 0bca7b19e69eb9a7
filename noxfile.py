import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

nox.options.sessions = ["tests"]


def _pytest(session: nox.Session, *args: str) -> None:
    session.install("-e", ".[test]")
    session.run("pytest", *args, *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _pytest(session)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_ledger(session: nox.Session) -> None:
    """Domain and application layers: aggregates, commits, checkout, concurrency."""
    _pytest(session, "-m", "domain or application")


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_api(session: nox.Session) -> None:
    """HTTP endpoints and behaviour scenarios."""
    _pytest(session, "-m", "integration or bdd")
