"""Configuration management for framepace."""

import logging
from pathlib import Path
from typing import Optional, Dict, Any, Literal, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


class WriterConfig(BaseModel):
    """Configuration for the constant-rate stream writer."""
    fps: float = 25.0  # Output frame rate
    capacity: int = 40  # Frames held back for reordering

    @field_validator("fps")
    @classmethod
    def validate_fps(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"fps must be positive, got {v}")
        return v

    @field_validator("capacity")
    @classmethod
    def validate_capacity(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"capacity must be at least 2, got {v}")
        return v


class CaptureConfig(BaseModel):
    """Configuration for the screen capture source."""
    monitor: int = 1  # 0 = all monitors, 1 = primary
    region: Optional[Tuple[int, int, int, int]] = None  # left, top, width, height
    fps: float = 25.0  # Target capture rate
    image_format: Literal["jpeg", "png"] = "jpeg"
    jpeg_quality: int = Field(default=80, ge=0, le=100)


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = "INFO"
    log_to_file: bool = False
    log_directory: str = "logs"
    max_log_size_mb: int = 100
    backup_count: int = 5


class FramepaceConfig(BaseModel):
    """Root configuration for framepace."""

    project_name: str = "framepace"
    debug_mode: bool = False

    # Sub-configurations
    writer: WriterConfig = Field(default_factory=WriterConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def setup_logging(self) -> None:
        """Configure logging based on config."""
        level_name = "DEBUG" if self.debug_mode else self.logging.level.upper()
        log_level = getattr(logging, level_name)

        handlers = []

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

        # File handler
        if self.logging.log_to_file:
            log_dir = Path(self.logging.log_directory)
            log_dir.mkdir(exist_ok=True, parents=True)

            from logging.handlers import RotatingFileHandler
            file_handler = RotatingFileHandler(
                log_dir / "framepace.log",
                maxBytes=self.logging.max_log_size_mb * 1024 * 1024,
                backupCount=self.logging.backup_count
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        logging.basicConfig(
            level=log_level,
            handlers=handlers,
            force=True
        )

        logger.info(f"Logging configured: level={level_name}")


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    configure_logging: bool = True,
) -> FramepaceConfig:
    """Load configuration from a YAML file with optional overrides.

    Args:
        config_path: Path to YAML config file. If None, defaults are used.
        overrides: Dictionary of config overrides (nested keys with dots)
        configure_logging: Call :meth:`FramepaceConfig.setup_logging`.

    Returns:
        Validated FramepaceConfig instance

    Example:
        >>> config = load_config("config/record.yaml")
        >>> config = load_config(overrides={"writer.fps": 30})
    """
    config_dict: Dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            logger.info(f"Loading config from {path}")
            with open(path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            logger.warning(f"Config file not found: {path}, using defaults")

    if overrides:
        config_dict = _apply_overrides(config_dict, overrides)

    config = FramepaceConfig(**config_dict)
    if configure_logging:
        config.setup_logging()

    return config


def _apply_overrides(
    config_dict: Dict[str, Any],
    overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """Apply nested overrides to config dictionary.

    Example:
        overrides = {"writer.fps": 30}
        -> config_dict["writer"]["fps"] = 30
    """
    for key, value in overrides.items():
        keys = key.split(".")
        d = config_dict
        for k in keys[:-1]:
            d = d.setdefault(k, {})
        d[keys[-1]] = value
    return config_dict
