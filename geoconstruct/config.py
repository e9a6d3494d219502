"""Configuration helpers for constructions."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any


@dataclass
class ConstructionConfig:
    """Defaults applied to every new :class:`~geoconstruct.Construction`."""

    intermediates_visible: bool = False
    default_style: Any = None
    # Raise usage errors instead of recording them as diagnostics.
    strict: bool = False
    # Joins a compound's name to the suffix of each auxiliary it registers.
    separator: str = "#"
    # Denominators with magnitude <= eps are treated as zero.
    eps: float = 0.0


_CONSTRUCTION_CONFIG = ConstructionConfig()


def get_construction_config() -> ConstructionConfig:
    return copy.deepcopy(_CONSTRUCTION_CONFIG)


def set_construction_config(config: ConstructionConfig) -> None:
    global _CONSTRUCTION_CONFIG
    _CONSTRUCTION_CONFIG = copy.deepcopy(config)
