"""Configuration loading for PR Size Labeler."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = ".github/pull-request-size.yml"


class ConfigError(ValueError):
    """Raised when the labeler configuration is missing or invalid."""


@dataclass
class SizeTier:
    """A named size category with inclusive thresholds and its labels."""

    name: str
    files: int
    diff: int
    labels: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Main configuration object."""

    exclude_files: list[str] = field(default_factory=list)
    label_configs: list[SizeTier] = field(default_factory=list)
    added_lines_only: bool = False


def _parse_threshold(tier_name: str, key: str, value: object) -> int:
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Tier '{tier_name}': '{key}' must be an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"Tier '{tier_name}': '{key}' must not be negative, got {value}")
    return value


def _parse_tier(position: int, data: object) -> SizeTier:
    if not isinstance(data, dict):
        raise ConfigError(f"label_configs[{position}] must be a mapping")

    name = data.get("size")
    if not isinstance(name, str) or not name:
        raise ConfigError(f"label_configs[{position}] is missing a 'size' name")

    labels = data.get("labels")
    if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
        raise ConfigError(f"Tier '{name}': 'labels' must be a list of strings")

    return SizeTier(
        name=name,
        files=_parse_threshold(name, "files", data.get("files")),
        diff=_parse_threshold(name, "diff", data.get("diff")),
        labels=list(labels),
    )


def validate_config(config: Config) -> Config:
    """Check the structural invariants the sizing engine relies on.

    Tier order is the size rank, so thresholds must not decrease from one
    tier to the next and tier names must be unique.

    Raises:
        ConfigError: If any invariant is violated.
    """
    if not config.label_configs:
        raise ConfigError("'label_configs' must define at least one size tier")

    seen: set[str] = set()
    previous: SizeTier | None = None
    for tier in config.label_configs:
        if tier.name in seen:
            raise ConfigError(f"Tier '{tier.name}' is defined more than once")
        seen.add(tier.name)

        if not tier.labels:
            raise ConfigError(f"Tier '{tier.name}' must have at least one label")

        if previous is not None:
            for dimension in ("files", "diff"):
                if getattr(tier, dimension) < getattr(previous, dimension):
                    raise ConfigError(
                        f"Tier '{tier.name}' has a lower '{dimension}' threshold "
                        f"({getattr(tier, dimension)}) than the preceding tier "
                        f"'{previous.name}' ({getattr(previous, dimension)}); "
                        "tiers must be ordered from smallest to largest"
                    )
        previous = tier

    return config


def load_config(path: Path) -> Config:
    """Load and validate configuration from a YAML file.

    Unlike optional settings, the tier table has no sensible default, so a
    missing or invalid file is an error rather than a fallback.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    config = Config()

    if "exclude_files" in data:
        patterns = data["exclude_files"] or []
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigError("'exclude_files' must be a list of glob patterns")
        config.exclude_files = patterns

    if "added_lines_only" in data:
        if not isinstance(data["added_lines_only"], bool):
            raise ConfigError("'added_lines_only' must be true or false")
        config.added_lines_only = data["added_lines_only"]

    tiers = data.get("label_configs") or []
    if not isinstance(tiers, list):
        raise ConfigError("'label_configs' must be a list of size tiers")
    config.label_configs = [_parse_tier(i, entry) for i, entry in enumerate(tiers)]

    return validate_config(config)
