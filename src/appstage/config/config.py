"""Configuration management for appstage."""
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from appstage.config.file_ops import write_text_file
from appstage.config.paths import default_config_path
from appstage.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger

PUBLISH_TIMEOUT_SECONDS_DEFAULT = 5 * 60
CLEANUP_RETRY_ATTEMPTS_DEFAULT = 10
CLEANUP_RETRY_DELAY_SECONDS_DEFAULT = 0.1


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Library configuration."""

    # Executable used to publish applications
    build_tool_command: str = "dotnet"

    # Seconds to wait for the publish process before giving up
    publish_timeout_seconds: float = PUBLISH_TIMEOUT_SECONDS_DEFAULT

    # Directory deletion retries during disposal
    cleanup_retry_attempts: int = CLEANUP_RETRY_ATTEMPTS_DEFAULT
    cleanup_retry_delay_seconds: float = CLEANUP_RETRY_DELAY_SECONDS_DEFAULT

    # Root for build outputs and consumable copies (system temp dir when unset)
    temp_root: Path | None = _path_field()

    # Log file path (console only when unset)
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration to file and return the written path."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = target or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# appstage configuration file")
        lines.append("")

        lines.append("# Build tool executable used for publishing")
        lines.append(
            f"build_tool_command = {self._format_toml_value(config['build_tool_command'])}"
        )
        lines.append("")

        lines.append("# Seconds to wait for a publish before failing (default 300)")
        lines.append(
            "publish_timeout_seconds = "
            f"{self._format_toml_value(config['publish_timeout_seconds'])}"
        )
        lines.append("")

        lines.append("# Directory deletion retries on dispose")
        lines.append(
            "cleanup_retry_attempts = "
            f"{self._format_toml_value(config['cleanup_retry_attempts'])}"
        )
        lines.append(
            "cleanup_retry_delay_seconds = "
            f"{self._format_toml_value(config['cleanup_retry_delay_seconds'])}"
        )
        lines.append("")

        lines.append("# Root directory for staged builds (optional)")
        lines.append('# Example: temp_root = "/tmp/appstage"')
        if config["temp_root"] is not None:
            lines.append(f"temp_root = {self._format_toml_value(config['temp_root'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, falling back to defaults when absent."""
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        if not config_file.exists():
            logger.debug("No configuration at %s; using defaults", config_file)
            instance = cls()
        else:
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration: %s", e)
                raise ConfigError(f"Cannot read configuration {config_file}: {e}") from e

            known = {f.name for f in fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            instance = cls(**{k: v for k, v in config_dict.items() if k in known})
            logger.info("Configuration loaded from %s", config_file)

        if instance.log_file is not None and DEFAULT_LOG_FILE is None:
            _ = setup_logger(log_file=instance.log_file)

        cls._instance = instance
        return instance


# Global configuration instance
config = Config.load()
