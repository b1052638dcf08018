"""Configuration loading and validation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from mhtml2html.processor.charsets import CHARSETS


@dataclass
class ConversionConfig:
    """Conversion options."""

    recurse_frames: bool = False
    charset_default: str = "utf-8"
    max_frame_depth: int = 8
    parser: str = "html.parser"  # BeautifulSoup parser: html.parser, lxml, html5lib


@dataclass
class OutputConfig:
    """Output file options."""

    directory: Path | None = None  # None writes next to the input
    suffix: str = ".html"
    overwrite: bool = False


@dataclass
class LoggingConfig:
    """Logging options."""

    level: str = "INFO"
    file: Path | None = None
    operations_log: Path | None = None  # JSONL record of conversions


@dataclass
class Config:
    """Complete application configuration."""

    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to YAML config file. Defaults to mhtml2html.yaml.

    Returns:
        Loaded Config object.
    """
    config = Config()

    # Try default paths if not specified
    if config_path is None:
        for default_path in ["mhtml2html.yaml", "mhtml2html.yml", "config.yaml"]:
            if Path(default_path).exists():
                config_path = Path(default_path)
                break

    if config_path and config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
            config = _parse_config(data)

    return config


def _optional_path(value: Any) -> Path | None:
    return Path(value) if value else None


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse configuration dictionary into Config object.

    Args:
        data: Raw configuration dictionary.

    Returns:
        Config object.
    """
    config = Config()

    # Conversion section
    if "conversion" in data:
        conv_data = data["conversion"] or {}
        config.conversion = ConversionConfig(
            recurse_frames=conv_data.get("recurse_frames", False),
            charset_default=conv_data.get("charset_default", "utf-8"),
            max_frame_depth=conv_data.get("max_frame_depth", 8),
            parser=conv_data.get("parser", "html.parser"),
        )

    # Output section
    if "output" in data:
        out_data = data["output"] or {}
        config.output = OutputConfig(
            directory=_optional_path(out_data.get("directory")),
            suffix=out_data.get("suffix", ".html"),
            overwrite=out_data.get("overwrite", False),
        )

    # Logging section
    if "logging" in data:
        log_data = data["logging"] or {}
        config.logging = LoggingConfig(
            level=log_data.get("level", "INFO"),
            file=_optional_path(log_data.get("file")),
            operations_log=_optional_path(log_data.get("operations_log")),
        )

    return config


def validate_config(config: Config) -> list[str]:
    """Validate configuration, return list of issues.

    Args:
        config: Configuration to validate.

    Returns:
        List of validation issue messages.
    """
    issues = []

    if not CHARSETS.is_known(config.conversion.charset_default):
        issues.append(f"Unknown default charset: {config.conversion.charset_default}")

    if config.conversion.max_frame_depth < 0:
        issues.append("max_frame_depth cannot be negative")

    valid_parsers = {"html.parser", "lxml", "html5lib"}
    if config.conversion.parser not in valid_parsers:
        issues.append(f"Invalid parser value: {config.conversion.parser}")

    if not config.output.suffix.startswith("."):
        issues.append(f"Output suffix should start with '.': {config.output.suffix}")

    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if config.logging.level.upper() not in valid_levels:
        issues.append(f"Invalid log level: {config.logging.level}")

    return issues


def create_default_config(path: Path) -> None:
    """Create default configuration file.

    Args:
        path: Path to write config file.
    """
    default_config = """# mhtml2html configuration

conversion:
  # Convert nested cid: frames into data URIs
  recurse_frames: false
  # Charset for parts whose Content-Type declares none
  charset_default: "utf-8"
  # Deepest frame nesting that is still converted
  max_frame_depth: 8
  # BeautifulSoup parser: html.parser, lxml or html5lib
  parser: "html.parser"

output:
  # Leave empty to write next to each input file
  directory:
  suffix: ".html"
  overwrite: false

logging:
  level: "INFO"
  file:
  # JSONL record of each conversion
  operations_log:
"""
    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)
