"""Configuration: parse-error policy, discovery exclusions, PHP registry options."""

from __future__ import annotations

import os
from dataclasses import dataclass

from attr_validator.exceptions import ConfigError
from attr_validator.registry.php import PHP_BINARY, PHP_TIMEOUT

ON_PARSE_ERROR_ABORT = "abort"
ON_PARSE_ERROR_SUSPECT = "suspect"
PARSE_ERROR_POLICIES = (ON_PARSE_ERROR_ABORT, ON_PARSE_ERROR_SUSPECT)

_ENV_PREFIX = "ATTR_VALIDATOR_"


@dataclass(frozen=True)
class AnalyzerSettings:
    on_parse_error: str = ON_PARSE_ERROR_ABORT  # "abort" | "suspect"
    exclude_dirs: tuple[str, ...] = ()
    php_binary: str = PHP_BINARY
    php_bootstrap: str | None = None
    php_timeout: float = PHP_TIMEOUT

    def __post_init__(self) -> None:
        if self.on_parse_error not in PARSE_ERROR_POLICIES:
            raise ConfigError(
                f"on_parse_error must be one of {', '.join(PARSE_ERROR_POLICIES)}, "
                f"got '{self.on_parse_error}'"
            )
        if self.php_timeout <= 0:
            raise ConfigError(f"php_timeout must be positive, got {self.php_timeout}")


def load_settings() -> AnalyzerSettings:
    """Build settings from ATTR_VALIDATOR_* environment variables.

    ATTR_VALIDATOR_EXCLUDE_DIRS is comma separated, e.g. ``vendor,var``.
    """
    raw_timeout = os.environ.get(f"{_ENV_PREFIX}PHP_TIMEOUT", "")
    try:
        php_timeout = float(raw_timeout) if raw_timeout else PHP_TIMEOUT
    except ValueError as e:
        raise ConfigError(f"{_ENV_PREFIX}PHP_TIMEOUT must be a number, got '{raw_timeout}'") from e

    exclude = os.environ.get(f"{_ENV_PREFIX}EXCLUDE_DIRS", "")
    return AnalyzerSettings(
        on_parse_error=os.environ.get(f"{_ENV_PREFIX}ON_PARSE_ERROR", ON_PARSE_ERROR_ABORT).lower(),
        exclude_dirs=tuple(d.strip() for d in exclude.split(",") if d.strip()),
        php_binary=os.environ.get(f"{_ENV_PREFIX}PHP_BINARY", PHP_BINARY),
        php_bootstrap=os.environ.get(f"{_ENV_PREFIX}PHP_BOOTSTRAP") or None,
        php_timeout=php_timeout,
    )
