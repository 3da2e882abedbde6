from __future__ import annotations

# Standard Library Imports
import logging
import sys
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# GEOFRAMES Imports
from geoframes.common.behavioral_config import CONFIG_ENV_VARIABLE, BehavioralConfig
from geoframes.physics.transforms.eops.getter import clearLoaders

# Local Imports
from . import EOP_FIXTURE_FILE

# Type Checking Imports
if TYPE_CHECKING:
    # GEOFRAMES Imports
    from geoframes.common.logger import Logger


@pytest.fixture(autouse=True)
def _patchMissingEnvVariables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Automatically delete each environment variable, if set.

    Args:
        monkeypatch (:class:`pytest.MonkeyPatch`): monkeypatch obj to track changes

    Note:
        This is used so tests can assume a "blank" configuration, and it won't
        overwrite a user's custom-set environment variables.
    """
    with monkeypatch.context() as m_patch:
        m_patch.delenv(CONFIG_ENV_VARIABLE, raising=False)
        BehavioralConfig.resetConfig()
        yield
        # Make sure we reset the config after each test function
        BehavioralConfig.resetConfig()


@pytest.fixture(autouse=True)
def _localEOPData(request: pytest.FixtureRequest, _patchMissingEnvVariables: None) -> None:
    """Point the EOP config at the local fixture file, so no test downloads EOP data.

    Args:
        request (:class:`pytest.FixtureRequest`): request obj to test for marks to bypass this
    """
    clearLoaders()
    if "default_eop_config" not in request.keywords:
        eop_config = BehavioralConfig.getConfig().eop
        eop_config.LoaderName = "LocalDotDatEOPLoader"
        eop_config.LoaderLocation = str(EOP_FIXTURE_FILE)
    yield
    clearLoaders()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest options without an .ini file."""
    config.addinivalue_line("markers", "default_eop_config: keep the packaged EOP config for test")
