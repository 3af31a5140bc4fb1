#!/usr/bin/env python3
"""
Physics preset loading utilities.

Presets are small JSON files in the presets/ folder next to the package:

Preset JSON (presets/*.json):
{
  "name": "Bouncy",                  # display name, defaults to the file name
  "description": "Optional description",
  "spring_stiffness": 0.08,
  "damping": 0.75
}

Users can add their own JSON files into this folder and they'll be picked up by the loader.
Files are listed in sorted order, so a numeric prefix (1_bouncy.json) controls the order
of the UI buttons and of the 1-4 keyboard shortcuts. When the folder is missing or holds no
valid preset, the four built-in presets are used instead.
"""
import json
import logging
import math
import os
from typing import List, Optional

from .data_models import PhysicsPreset

logger = logging.getLogger(__name__)

PRESETS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "presets")

BUILTIN_PRESETS: List[PhysicsPreset] = [
    PhysicsPreset("Bouncy", 0.08, 0.75, "Loose spring, light damping"),
    PhysicsPreset("Smooth", 0.15, 0.90, "Default feel"),
    PhysicsPreset("Stiff", 0.35, 0.95, "Snappy, heavily damped"),
    PhysicsPreset("Fluid", 0.05, 0.80, "Slow and wavy"),
]


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Skipping preset %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping preset %s: top level is not an object", path)
        return None
    return data


def preset_from_dict(data: dict, default_name: str = "Preset") -> PhysicsPreset:
    """
    Build a preset from parsed JSON.

    Raises:
        ValueError: if stiffness or damping is missing, not a number or negative.
    """
    try:
        stiffness = float(data["spring_stiffness"])
        damping = float(data["damping"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Preset needs numeric spring_stiffness and damping ({exc})") from exc
    if not (math.isfinite(stiffness) and math.isfinite(damping)) or stiffness < 0 or damping < 0:
        raise ValueError(f"Preset constants must be finite and non-negative, got k={stiffness} c={damping}")
    return PhysicsPreset(
        name=str(data.get("name") or default_name),
        spring_stiffness=stiffness,
        damping=damping,
        description=str(data.get("description", "")),
    )


def load_preset(path: str) -> Optional[PhysicsPreset]:
    """Load one preset file; None if it cannot be read or is invalid."""
    data = _read_json(path)
    if data is None:
        return None
    default_name = os.path.splitext(os.path.basename(path))[0]
    try:
        return preset_from_dict(data, default_name)
    except ValueError as exc:
        logger.warning("Skipping preset %s: %s", path, exc)
        return None


def load_presets(directory: str = PRESETS_DIR) -> List[PhysicsPreset]:
    """Return the presets found in directory, or the built-ins if there are none."""
    presets: List[PhysicsPreset] = []
    if os.path.isdir(directory):
        for fn in sorted(os.listdir(directory)):
            if not fn.lower().endswith(".json"):
                continue
            preset = load_preset(os.path.join(directory, fn))
            if preset is not None:
                presets.append(preset)
    if not presets:
        logger.info("No preset files in %s; using built-in presets", directory)
        return list(BUILTIN_PRESETS)
    logger.debug("Loaded %d presets from %s", len(presets), directory)
    return presets
