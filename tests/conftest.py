import pytest
from sanic.log import logger

from gitea_relay.config import Config


@pytest.fixture
def config():
    config = Config(
        GITEA_URL="https://gitea.example.com",
        OVERRIDE_LOGGING="DEBUG",
        PRIVATE_MODE=False,
    )

    logger.setLevel(config.OVERRIDE_LOGGING)

    return config
