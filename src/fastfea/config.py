"""
Configuration for transformers.

Every transformer carries a ``TransformerConfig``. Effective parameters are
built by layering keyword overrides on top of the config params, on top of
the class defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class TransformerConfig:
    """Configuration for a single transformer."""

    name: Optional[str] = None
    """Display name used in logs and repr. Defaults to the class name."""

    params: Dict[str, Any] = field(default_factory=dict)
    """Transformer-specific parameters."""


def merge_params(base: Mapping[str, Any], *overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge parameter mappings left to right.

    ``None`` values in an override are ignored so callers can pass optional
    keyword arguments through unchanged.

    Args:
        base: Default parameters.
        overrides: Mappings applied in order. ``None`` mappings are skipped.

    Returns:
        New dictionary with the merged parameters.
    """
    merged = dict(base)
    for override in overrides:
        if override is None:
            continue
        if not isinstance(override, Mapping):
            raise TypeError(f"Expected mapping params, got {type(override).__name__}.")
        merged.update({k: v for k, v in override.items() if v is not None})
    return merged
