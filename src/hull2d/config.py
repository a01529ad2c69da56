from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).parent / "config.yaml"

SORT_STRATEGIES = ("comparator", "stable")


@dataclass
class HullConfig:
    """
    Sizing and tolerance options shared by hulls and their scratch stacks.

    Attributes:
        max_blobs_per_group: Number of blobs a single hull may collect.
        corners_per_blob: Corner points contributed by each blob.
        epsilon: Tolerance for orientation and parallel tests, float32
            machine epsilon by default.
        sort_strategy: Name of the polar sort, "comparator" or "stable".
    """

    max_blobs_per_group: int = 256
    corners_per_blob: int = 8
    epsilon: float = 1.19209290e-07
    sort_strategy: str = "comparator"

    def __post_init__(self) -> None:
        self.epsilon = float(self.epsilon)
        if self.sort_strategy not in SORT_STRATEGIES:
            raise ValueError(f"Unknown sort strategy: {self.sort_strategy}")
        if self.max_points_per_hull <= 0:
            raise ValueError(
                f"Hull capacity must be positive, got {self.max_points_per_hull}"
            )

    @property
    def max_points_per_hull(self) -> int:
        return self.max_blobs_per_group * self.corners_per_blob

    @classmethod
    def from_yaml(cls, path: Path = CONFIG_PATH) -> HullConfig:
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        return cls()


CONFIG = HullConfig.from_yaml()
