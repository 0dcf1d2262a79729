import logging
import os

import pytest

from multiai.logger import get_logger


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no provider or tunable variables set and no .env in reach."""
    for key in list(os.environ):
        if key.startswith("MULTIAI_") or key.endswith("_API_KEY") or key.endswith("_API_URL"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("OPENAI_MODEL", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
