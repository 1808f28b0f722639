# assetvault/config.py
"""
Registry configuration.

Loaded from YAML:

    clock: logical      # system | logical
    max_id: 1000        # allocator ceiling
    log_level: DEBUG
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from .clock import CLOCK_KINDS, make_clock
from .ids import MAX_ID, IdAllocator
from .registry import Registry


@dataclass
class VaultConfig:
    """Settings used to build a Registry."""
    clock: str = "system"
    max_id: int = MAX_ID
    log_level: str = "INFO"

    def __post_init__(self):
        if self.clock not in CLOCK_KINDS:
            raise ValueError(f"Invalid clock: {self.clock!r} (expected one of {', '.join(CLOCK_KINDS)})")
        if isinstance(self.max_id, bool) or not isinstance(self.max_id, int) or self.max_id < 1:
            raise ValueError(f"Invalid max_id: {self.max_id!r} (expected a positive integer)")
        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log_level: {self.log_level!r}")
        self.log_level = level

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VaultConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "VaultConfig":
        """Parse config from YAML string. An empty document gives defaults."""
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("Config must be a YAML mapping")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "VaultConfig":
        """Load config from YAML file."""
        with open(path, "r") as f:
            return cls.from_yaml(f.read())

    def build_registry(self) -> Registry:
        """Create a fresh, empty registry with these settings."""
        return Registry(
            clock=make_clock(self.clock),
            allocator=IdAllocator(max_id=self.max_id),
        )
