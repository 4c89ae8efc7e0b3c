import os
from pathlib import Path

from environs import Env  # type: ignore
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

env = Env()

VERSION = "0.5.0"


def find_env_file():
    # env file: default to current dir, else home dir
    env_file = os.path.join(os.getcwd(), ".env")
    if not os.path.isfile(env_file):
        env_file = os.path.join(str(Path.home()), ".waila", ".env")
    if os.path.isfile(env_file):
        env.read_env(env_file, recurse=False, override=True)
    else:
        env_file = ""
    return env_file


class WailaSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=find_env_file() or None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env_file: str = Field(default="")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    max_input_length: int = Field(
        default=100_000,
        gt=0,
        title="Maximum input length",
        description="Longer inputs are rejected before any decoder runs.",
    )


settings = WailaSettings()
settings.env_file = find_env_file()
