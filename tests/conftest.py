# tests/conftest.py
import os


def pytest_sessionstart(session):
    # Hermetic runs: environment overrides must not leak in from the caller's shell.
    for key in list(os.environ):
        if key.startswith("TOKSEG_"):
            del os.environ[key]
