from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    GITEA_URL: str

    OVERRIDE_LOGGING: Literal[
        "CRITICAL",
        "FATAL",
        "ERROR",
        "WARNING",
        "WARN",
        "INFO",
        "DEBUG",
        "NOTSET",
    ]

    # Report every repository as private, for instances behind a login wall
    PRIVATE_MODE: bool = False

    HOOK_EVENTS: list[str] = ["push", "create", "pull_request"]
