"""Run the SickFits suites against every supported interpreter.

    nox -s tests          # domain, application, integration and bdd suites
    nox -s tests_domain   # aggregate tests only
"""

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

# bcrypt ships a compiled extension; a wheel cached for another interpreter
# fails to import, so it is reinstalled per session.
_C_EXT_PACKAGES = ["bcrypt"]


def _install(session: nox.Session) -> None:
    """Install sickfits and its test group into the session virtualenv."""
    session.run(
        "poetry",
        "install",
        "--with",
        "test",
        "--all-extras",
        external=True,
    )
    session.run(
        "pip",
        "install",
        "--force-reinstall",
        "--no-cache-dir",
        *_C_EXT_PACKAGES,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Every storefront suite, including the TestClient and checkout feature tests."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """User, Item, CartItem and Order aggregate tests; no HTTP or adapters."""
    _install(session)
    session.run("pytest", "-m", "domain")
