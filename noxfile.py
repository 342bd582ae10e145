"""
Nox scripts the environment our tests run in. A few commands to check out:

    nox                        Run all sessions.
    nox -l                     List all sessions.
    nox -s <session>           Run a specific session.
    nox ... -- --wheel         Run tests against the wheel in dist.
"""

import glob
import os
import tempfile

import nox

SRC_DIR = "lrulist"

SILENT_INSTALLS = True

# The minimal set of dependencies we need to run tests.
BASE_TEST_DEPS = ("pytest", "pytest-asyncio")


@nox.session()
def test_core(session):
    _install_test_deps(session)
    _run_tests(session, SRC_DIR)
    session.run("pytest", "tests")


@nox.session()
def lint(session):
    session.install("black", "flake8", "flake8-isort", "isort==5.12.0", silent=SILENT_INSTALLS)
    session.run("black", "--check", "src", "tests", "setup.py", "noxfile.py")
    session.run("isort", "--check-only", "src", "tests")
    session.run("flake8", "src", "tests")


def _install_test_deps(session):
    # Choose the way we'll install lrulist ... wheel or source.
    install_wheel = "--wheel" in session.posargs
    pkg = _get_wheel() if install_wheel else "."

    session.install(pkg, *BASE_TEST_DEPS)

    # Sanity check we have installed lrulist (and that it is from a wheel if needed)
    session.run("python", "-c", "import lrulist")
    if install_wheel:
        lines = [
            "import sys, lrulist as m",
            "print(f'Using lrulist from: {m.__file__}')",
            "sys.exit(0 if 'site-packages' in m.__file__ else 1)",
        ]
        session.run("python", "-c", ";".join(lines))


def _get_wheel():
    path = "dist/lrulist-*.whl"
    wheels = glob.glob(path)
    if len(wheels) != 1:
        msg = f"There should be one wheel in {path}. Got {len(wheels)}"
        raise Exception(msg)
    return wheels[0]


def _run_tests(session, test_path, env=None):
    """Run tests against a wheel or the source code. Paths should be relative and start with lrulist."""
    env = env.copy() if env else {}

    if "--wheel" not in session.posargs:
        session.run("pytest", f"src/{test_path}", env=env)
        return

    # Run from a temporary directory so the tests import the installed wheel, not ./src.
    py = os.path.join(session.bin, "python")
    site_packages = session.run(py, "-c", "import site; print(site.getsitepackages()[0])", silent=True).strip()
    abs_test_path = os.path.abspath(os.path.join(site_packages, test_path))
    pytest_path = os.path.join(session.bin, "pytest")

    with tempfile.TemporaryDirectory() as tmp:
        os.chdir(tmp)
        # This env var is used to detect if we're running from the wheel.
        env["LRULIST_TESTING_WHEEL"] = "1"
        session.run(pytest_path, abs_test_path, env=env)
