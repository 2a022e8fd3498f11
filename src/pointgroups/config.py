"""
Configuration & Policies
========================
This module serves as the central registry for scene-wide constants and the
policy switches a host scene can tune.

Why is this file needed?
------------------------
1. Abstraction: It keeps id/name patterns out of the model code.
2. Policies: Behaviours that are a deliberate choice of the host (purging empty
   groups, how a failing style broadcast is reported) live in one dataclass that
   the Scene owns and passes down.

Exports:
    SceneSettings: Per-scene configuration.
    PropertyFailurePolicy: How Group.set_property reports member failures.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


# Global Constants
DEFAULT_SCENE_ID: str = "jxgScene1"
GROUP_ID_INFIX: str = "Group"
GROUP_NAME_PREFIX: str = "group_"
POINT_NAME_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
EPSILON: float = 1e-9


class PropertyFailurePolicy(StrEnum):
    ABORT = "abort"      # first failing member propagates, the rest are not styled
    COLLECT = "collect"  # every member is attempted, failures are raised together


@dataclass
class SceneSettings:
    """
    Holds the tunable behaviour of one scene.
    """
    # Keep the Group shell registered after ungroup() unless asked otherwise
    purge_empty_groups_on_ungroup: bool = False
    property_failure_policy: PropertyFailurePolicy = PropertyFailurePolicy.ABORT
    point_name_alphabet: str = POINT_NAME_ALPHABET
    epsilon: float = EPSILON
