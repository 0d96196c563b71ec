"""
Configuration management for the desk calculator.
"""

import logging
import math
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml


def max_depth_limit() -> int:
    """Largest usable max_depth: each nesting level takes several interpreter stack frames."""
    return max(1, sys.getrecursionlimit() // 5)


def default_constants() -> Dict[str, float]:
    """Names every new session starts with."""
    return {
        'pi': math.pi,
        'e': math.e,
    }


@dataclass
class DeskCalcConfig:
    """Configuration for a desk calculator session."""

    precision: int = 6
    max_depth: int = 200
    constants: Dict[str, float] = field(default_factory=default_constants)
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def load_from_file(cls, config_path: str) -> 'DeskCalcConfig':
        """
        Load configuration from a YAML file.

        Settings missing from the file keep their default values.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file contains invalid settings
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls.create_default()

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeskCalcConfig':
        """Create a configuration from a dictionary, as read from a YAML file."""
        unknown = set(data) - {'precision', 'max_depth', 'constants', 'log_level'}
        if unknown:
            raise ValueError(f"Unknown configuration settings: {', '.join(sorted(unknown))}")

        constants = data.get('constants')
        if constants is None:
            constants = default_constants()

        if not isinstance(constants, dict):
            raise ValueError("'constants' must be a mapping of names to numbers")

        try:
            constants = {str(name): float(value) for name, value in constants.items()}

        except (TypeError, ValueError) as e:
            raise ValueError(f"'constants' must be a mapping of names to numbers: {e}") from e

        return cls(
            precision=data.get('precision', 6),
            max_depth=data.get('max_depth', 200),
            constants=constants,
            log_level=str(data.get('log_level', 'WARNING')).upper()
        )

    @classmethod
    def create_default(cls) -> 'DeskCalcConfig':
        """Create the default configuration."""
        return cls()

    def validate(self) -> None:
        """
        Check the settings are usable.

        Raises:
            ValueError: If any setting is invalid
        """
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ValueError(f"'precision' must be a positive integer, got {self.precision!r}")

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"'max_depth' must be a positive integer, got {self.max_depth!r}")

        if self.max_depth > max_depth_limit():
            raise ValueError(f"'max_depth' must be at most {max_depth_limit()}, got {self.max_depth!r}")

        for name in self.constants:
            if not name or not name[0].isalpha() or not name.isalnum():
                raise ValueError(f"Constant name must be a letter followed by letters or digits: {name!r}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary suitable for YAML output."""
        return {
            'precision': self.precision,
            'max_depth': self.max_depth,
            'constants': dict(self.constants),
            'log_level': self.log_level
        }

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
