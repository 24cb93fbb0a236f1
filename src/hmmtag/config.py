"""Tagger configuration.

Settings can be given directly, loaded from a YAML file, or overridden from
the command line:

    alpha: 1.0               # additive smoothing constant
    rare_threshold: 1        # words seen this often or less become unknown-word buckets
    unknown_probability: 0.001
    uppercase: true          # case-normalize vocabulary entries
    log_space: true          # decode with summed log-probabilities
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from hmmtag.exceptions import ConfigError, InputFileError

logger = logging.getLogger(__name__)

DEFAULT_ALPHA = 1.0
DEFAULT_RARE_THRESHOLD = 1
DEFAULT_UNKNOWN_PROBABILITY = 0.001


@dataclass(frozen=True, slots=True)
class TaggerConfig:
    """Parameters controlling model estimation and decoding.

    Attributes:
        alpha: Additive smoothing constant (1.0 is Laplace smoothing).
        rare_threshold: Words with a training count at or below this value are
            collapsed into their unknown-word bucket. 0 disables collapsing.
        unknown_probability: Emission probability used for every tag when a
            word's unknown-word bucket was never seen in training.
        uppercase: Upper-case words before vocabulary lookup.
        log_space: Score Viterbi paths with log-probabilities.
    """

    alpha: float = DEFAULT_ALPHA
    rare_threshold: int = DEFAULT_RARE_THRESHOLD
    unknown_probability: float = DEFAULT_UNKNOWN_PROBABILITY
    uppercase: bool = True
    log_space: bool = True

    def __post_init__(self) -> None:
        for name in ("alpha", "unknown_probability"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(message=f"{name} must be a number, got {value!r}")
        for name in ("uppercase", "log_space"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(message=f"{name} must be true or false, got {value!r}")
        if not self.alpha > 0:
            raise ConfigError(message=f"alpha must be positive, got {self.alpha}")
        if isinstance(self.rare_threshold, bool) or not isinstance(self.rare_threshold, int):
            raise ConfigError(message=f"rare_threshold must be an integer, got {self.rare_threshold!r}")
        if self.rare_threshold < 0:
            raise ConfigError(message=f"rare_threshold must be non-negative, got {self.rare_threshold}")
        if not 0 < self.unknown_probability <= 1:
            raise ConfigError(
                message=f"unknown_probability must be in (0, 1], got {self.unknown_probability}"
            )

    def normalize_word(self, word: str) -> str:
        """Return the vocabulary key for a surface word."""
        return word.upper() if self.uppercase else word

    def with_overrides(self, **overrides: Any) -> "TaggerConfig":
        """Return a copy with every non-None override applied."""
        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "TaggerConfig":
        """Build a config from a plain mapping, rejecting unknown keys.

        Raises:
            ConfigError: If a key is unknown or a value is invalid.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(message=f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Path | str) -> TaggerConfig:
    """Load a TaggerConfig from a YAML file.

    An empty file yields the default configuration.

    Raises:
        InputFileError: If the file does not exist or cannot be read.
        ConfigError: If the YAML is invalid or holds unknown keys or bad values.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise InputFileError(message="Config file does not exist", path=config_path)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(message=f"Invalid YAML in {config_path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputFileError(message=f"Cannot read config file ({exc})", path=config_path) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(message=f"Config file {config_path} must contain a mapping")

    config = TaggerConfig.from_mapping(data)
    logger.debug("Loaded config from %s: %s", config_path, config)
    return config
