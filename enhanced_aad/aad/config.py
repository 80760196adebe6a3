# aad/config.py
"""
Engine configuration and logging setup.

AADConfig is attached to every Graph. The defaults reproduce plain IEEE-754
behaviour: sqrt of a negative number gives NaN and division by zero gives
+-Inf/NaN. `strict_domain=True` turns those two cases into NumericDomainError
at construction time.
"""

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "ENHANCED_AAD_"

_TRUE_STRINGS = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AADConfig:
    """
    Attributes
    ----------
    strict_domain : bool
        Reject sqrt(<0) and x/0 at construction instead of propagating NaN/Inf.
    log_level : str
        Level name passed to `setup_logger`.
    bump_size : float
        Default epsilon for finite-difference (bumping) gradients.
    """
    strict_domain: bool = False
    log_level: str = "WARNING"
    bump_size: float = 1e-6

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AADConfig":
        """
        Build a config from ENHANCED_AAD_STRICT_DOMAIN, ENHANCED_AAD_LOG_LEVEL
        and ENHANCED_AAD_BUMP_SIZE. Missing variables keep the defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()

        strict = env.get(ENV_PREFIX + "STRICT_DOMAIN")
        if strict is not None:
            config = replace(config, strict_domain=strict.strip().lower() in _TRUE_STRINGS)

        level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if level:
            config = replace(config, log_level=level.strip().upper())

        bump = env.get(ENV_PREFIX + "BUMP_SIZE")
        if bump:
            try:
                bump_size = float(bump)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}BUMP_SIZE must be a float, got {bump!r}")
            if bump_size <= 0.0:
                raise ValueError(f"{ENV_PREFIX}BUMP_SIZE must be positive, got {bump_size}")
            config = replace(config, bump_size=bump_size)

        return config


def setup_logger(log_level: str = "INFO") -> logging.Logger:
    """Configure console logging for the package and return its root logger."""
    log_level_dict = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    level = log_level_dict.get(log_level.upper(), logging.INFO)

    logger = logging.getLogger('enhanced_aad')
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)
    return logger
