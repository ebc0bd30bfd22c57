"""Solver configuration."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import json

from .core.parser import DEFAULT_BLANKS
from .solvers import WFCSolver

# key -> (type, accepts None)
_FIELD_TYPES = {
    "auto_fix_singles": (bool, False),
    "seed": (int, True),
    "max_steps": (int, True),
    "blank_markers": (str, False),
}


@dataclass
class SolverConfig:
    """Settings shared by the CLI commands."""
    auto_fix_singles: bool = True
    seed: Optional[int] = None
    max_steps: Optional[int] = None
    blank_markers: str = DEFAULT_BLANKS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SolverConfig:
        """
        Build settings from a mapping.

        Raises:
            ValueError: on an unknown key or a value of the wrong type.
        """
        unknown = set(data) - set(_FIELD_TYPES)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        for key, value in data.items():
            expected, optional = _FIELD_TYPES[key]
            if value is None and optional:
                continue
            # bool is an int subclass; keep the two apart
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ValueError(
                    f"Configuration key {key!r} must be {expected.__name__}"
                    f"{' or null' if optional else ''}, got {value!r}"
                )
        return cls(**data)

    @classmethod
    def from_json(cls, path: str) -> SolverConfig:
        """Load settings from a JSON object file."""
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def make_solver(self) -> WFCSolver:
        """Build a WFCSolver with these settings."""
        return WFCSolver(
            auto_fix_singles=self.auto_fix_singles,
            seed=self.seed,
            max_steps=self.max_steps,
        )
