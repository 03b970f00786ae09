"""
Solver configuration for the maneuvering board.

Settings can come from code, a JSON file, or the environment (a .env file
in the working directory is loaded first). Everything has a default so
SolverConfig() is always usable.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from .units import UnitSystem


ENV_PREFIX = "MANEUVERING_BOARD_"


@dataclass(frozen=True)
class SolverConfig:
    """Tunable constants for the intercept solver."""
    unit_system: UnitSystem = UnitSystem.NAUTICAL_METRIC
    stationary_speed: float = 10.0  # Display speed units, used for stationary targets
    speed_margin_mps: float = 0.5  # ~1 kn added to the numerical minimum speed
    gradient_tolerance: float = 1e-6  # Minimum is very flat
    time_scale_s: float = 3600.0  # Minimizer works in hours
    initial_guess: float = 1.0  # In time_scale_s units
    max_iterations: int = 200

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.stationary_speed <= 0:
            raise ValueError("Stationary speed must be positive")
        if self.speed_margin_mps < 0:
            raise ValueError("Speed margin cannot be negative")
        if self.gradient_tolerance <= 0:
            raise ValueError("Gradient tolerance must be positive")
        if self.time_scale_s <= 0:
            raise ValueError("Time scale must be positive")
        if self.initial_guess <= 0:
            raise ValueError("Initial guess must be positive")
        if self.max_iterations < 1:
            raise ValueError("Max iterations must be at least 1")

    @classmethod
    def from_json(cls, path: str) -> 'SolverConfig':
        """Load configuration from JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Solver config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SolverConfig':
        """Create configuration from dictionary."""
        defaults = cls()
        unit_system = data.get("unit_system", defaults.unit_system)
        if isinstance(unit_system, str):
            unit_system = UnitSystem.parse(unit_system)

        return cls(
            unit_system=unit_system,
            stationary_speed=float(data.get("stationary_speed", defaults.stationary_speed)),
            speed_margin_mps=float(data.get("speed_margin_mps", defaults.speed_margin_mps)),
            gradient_tolerance=float(data.get("gradient_tolerance", defaults.gradient_tolerance)),
            time_scale_s=float(data.get("time_scale_s", defaults.time_scale_s)),
            initial_guess=float(data.get("initial_guess", defaults.initial_guess)),
            max_iterations=int(data.get("max_iterations", defaults.max_iterations)),
        )

    @classmethod
    def from_env(cls) -> 'SolverConfig':
        """
        Create configuration from MANEUVERING_BOARD_* environment variables.

        Recognized variables: UNIT_SYSTEM, STATIONARY_SPEED, SPEED_MARGIN,
        GRADIENT_TOLERANCE. Unset variables keep their defaults.
        """
        load_dotenv()

        data: Dict[str, Any] = {}
        names = {
            "UNIT_SYSTEM": "unit_system",
            "STATIONARY_SPEED": "stationary_speed",
            "SPEED_MARGIN": "speed_margin_mps",
            "GRADIENT_TOLERANCE": "gradient_tolerance",
        }
        for env_name, field_name in names.items():
            value = os.getenv(ENV_PREFIX + env_name)
            if value is not None and value.strip():
                data[field_name] = value.strip()

        return cls.from_dict(data)
