#!filepath: tl_assistant/__init__.py

from .utils.logger import Logging, logs
from .config.app_config import AppConfig
from .config.log_config import LogConfig

__version__ = "0.1.0"


def init_logging(cfg: LogConfig) -> Logging:
    """Point the package-level `logs` at the sinks described by cfg."""
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
    )
    return logs


__all__ = [
    "logs", "Logging",
    "AppConfig",
    "init_logging",
    "__version__",
]
