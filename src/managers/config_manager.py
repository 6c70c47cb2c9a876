"""
Config Manager

Loads config.yaml into an immutable AppConfig. Falls back to
factory_defaults.yaml when the main file is missing or invalid.
"""

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from models.domain import DEFAULT_CLOCK_FORMAT
from models.enums import LogLevel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = SRC_DIR / "config" / "config.yaml"
DEFAULT_FACTORY_DEFAULTS_PATH = SRC_DIR / "config" / "factory_defaults.yaml"


class ConfigError(Exception):
    """Config file parsed but holds invalid values"""


@dataclass(frozen=True)
class AppConfig:
    """
    Startup parameters. Fixed for the lifetime of the process.

    filter_list_path is always absolute (relative paths in YAML resolve
    against the directory of the config file).
    """
    filter_list_path: Path
    encoding: str = "utf-8"
    counter_seed: int = 0
    tick_interval: float = 1.0
    clock_format: str = DEFAULT_CLOCK_FORMAT
    api_enabled: bool = True
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    log_level: LogLevel = LogLevel.INFO
    log_colors: bool = True


class ConfigManager:
    """
    Configuration loader

    Example:
        config = ConfigManager("config/config.yaml").load()
        config.filter_list_path   # -> absolute Path
        config.counter_seed       # -> int

    YAML layout:
        filter_list:
          path: ../data/filters.txt
          encoding: utf-8
        counter:
          seed: 0
        clock:
          interval_seconds: 1.0
          format: "%H:%M:%S"
        api:
          enabled: true
          host: 127.0.0.1
          port: 8000
        logging:
          level: INFO
          colors: true
    """

    def __init__(
        self,
        config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
        defaults_path: Union[str, Path] = DEFAULT_FACTORY_DEFAULTS_PATH,
    ):
        """
        Args:
            config_path: Main config file (relative paths resolve against src/)
            defaults_path: Factory defaults fallback
        """
        self.config_path = self._resolve(config_path)
        self.factory_defaults_path = self._resolve(defaults_path)
        self.config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path: Union[str, Path]) -> Path:
        path = Path(path)
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> AppConfig:
        """
        Load the YAML configuration

        Process:
        1. Load and validate config.yaml
        2. On any failure, log it and load factory_defaults.yaml instead

        Returns:
            AppConfig

        Raises:
            ConfigError / OSError / yaml.YAMLError: If the factory defaults fail too
        """
        try:
            self.config = self._load_file(self.config_path)
            log.info("Configuration loaded", path=str(self.config_path))
        except (OSError, yaml.YAMLError, ConfigError) as ex:
            log.error("Failed to load config", path=str(self.config_path),
                      error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.config = self._load_file(self.factory_defaults_path)

        log.info(
            "Filter list configured",
            path=str(self.config.filter_list_path),
            counter_seed=self.config.counter_seed,
            api=f"{self.config.api_host}:{self.config.api_port}" if self.config.api_enabled else "disabled"
        )
        return self.config

    def _load_file(self, path: Path) -> AppConfig:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Top level of {path.name} must be a mapping")
        return self.build_config(data, base_dir=path.parent)

    @staticmethod
    def build_config(data: Dict[str, Any], base_dir: Path) -> AppConfig:
        """
        Validate raw YAML data and build an AppConfig

        Raises:
            ConfigError: Missing filter list path or wrongly typed values
        """
        filter_list = _section(data, "filter_list")
        counter = _section(data, "counter")
        clock = _section(data, "clock")
        api = _section(data, "api")
        logging_cfg = _section(data, "logging")

        raw_path = filter_list.get("path")
        if not raw_path or not isinstance(raw_path, str):
            raise ConfigError("filter_list.path is required")
        file_path = Path(raw_path).expanduser()
        if not file_path.is_absolute():
            file_path = (base_dir / file_path).resolve()

        level_name = str(logging_cfg.get("level", LogLevel.INFO.name)).upper()
        if level_name not in LogLevel.__members__:
            raise ConfigError(f"logging.level must be one of {list(LogLevel.__members__)}")

        interval = _typed(clock, "interval_seconds", (int, float), 1.0)
        if interval <= 0:
            raise ConfigError("clock.interval_seconds must be positive")

        port = _typed(api, "port", int, 8000)
        if not 0 < port < 65536:
            raise ConfigError("api.port must be between 1 and 65535")

        return AppConfig(
            filter_list_path=file_path,
            encoding=_typed(filter_list, "encoding", str, "utf-8"),
            counter_seed=_typed(counter, "seed", int, 0),
            tick_interval=float(interval),
            clock_format=_typed(clock, "format", str, DEFAULT_CLOCK_FORMAT),
            api_enabled=_typed(api, "enabled", bool, True),
            api_host=_typed(api, "host", str, "127.0.0.1"),
            api_port=port,
            log_level=LogLevel[level_name],
            log_colors=_typed(logging_cfg, "colors", bool, True),
        )


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def _typed(section: Dict[str, Any], key: str, expected, default):
    value = section.get(key, default)
    # bool is an int subclass; don't let `true` pass as a port or seed
    if isinstance(value, bool) and expected is not bool:
        raise ConfigError(f"'{key}' has invalid value {value!r}")
    if not isinstance(value, expected):
        raise ConfigError(f"'{key}' has invalid value {value!r}")
    return value
