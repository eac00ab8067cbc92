"""Aim-cone target selection.

Picks the nearest living entity whose center lies within max_distance of the
eye and within max_angle_deg of the look direction. This tolerates imprecise
aim (arcing a shot above a target) where a strict raycast would miss, at the
cost of sometimes choosing a different visible entity than a raycast would.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np

from skillwatch.models import EntityDescriptor, Vec3

# Entities closer than this to the eye are degenerate (no usable direction)
MIN_TARGET_DISTANCE = 1e-3


def select_target(
    eye: Vec3,
    look: Vec3,
    entities: Iterable[EntityDescriptor],
    max_distance: float,
    max_angle_deg: float,
) -> Optional[EntityDescriptor]:
    """Return the nearest living, alive entity inside the aim cone, or None."""
    eye_v = np.asarray(eye, dtype=np.float64)
    look_v = np.asarray(look, dtype=np.float64)
    look_norm = float(np.linalg.norm(look_v))
    if look_norm < MIN_TARGET_DISTANCE or max_distance <= 0:
        return None
    look_v = look_v / look_norm
    min_dot = math.cos(math.radians(max_angle_deg))

    best: Optional[EntityDescriptor] = None
    best_distance = math.inf
    for entity in entities:
        if not (entity.is_living and entity.is_alive):
            continue
        offset = np.asarray(entity.center, dtype=np.float64) - eye_v
        # Bounding volume: cube around the eye expanded by max_distance
        if np.any(np.abs(offset) > max_distance):
            continue
        distance = float(np.linalg.norm(offset))
        if distance < MIN_TARGET_DISTANCE or distance > max_distance:
            continue
        if float(np.dot(offset / distance, look_v)) < min_dot:
            continue
        if distance < best_distance:
            best = entity
            best_distance = distance
    return best
