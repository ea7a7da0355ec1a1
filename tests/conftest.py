"""
Shared pytest fixtures.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_liveconf_logger():
    """Drop handlers left by CLI runs so they never write to closed streams."""
    yield
    logger = logging.getLogger("liveconf")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
