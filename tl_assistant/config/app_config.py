#!filepath: tl_assistant/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .log_config import LogConfig
from .parser_config import ParserConfig, RadiatorConfig
from .simulation_config import SimulationConfig
from tl_assistant.utils.errors import ConfigError


def project_root() -> str:
    """
    Project root derived from this file:
    tl_assistant/config/app_config.py -> tl_assistant/config -> tl_assistant -> root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    radiator: RadiatorConfig = Field(default_factory=RadiatorConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        YAML config + .env
        - defaults to tl_assistant/config/base.yml
        - independent of the current working directory
        - TL_ASSISTANT_LOG_LEVEL overrides log.level
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise ConfigError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must hold a mapping: {path}")

        level = os.getenv("TL_ASSISTANT_LOG_LEVEL")
        if level:
            raw.setdefault("log", {})
            raw["log"]["level"] = level

        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e
