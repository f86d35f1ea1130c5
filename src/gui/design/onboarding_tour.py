"""Onboarding tour registry.

Maps a viewer role to the ordered walkthrough shown for that role. Lookups are
total: roles without a configuration fall back to ``DEFAULT_ROLE`` so callers
never have to handle a missing tour. Content validation happens when a tour is
registered, not when it is played.

Built-in CardioRegistry content lives in ``gui.design.tour_content`` and is
loaded on first use; adding a role means registering another
``RoleTourConfig`` and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from config.settings import DEFAULT_ROLE

__all__ = [
    "Role",
    "TourStep",
    "RoleTourConfig",
    "register_role_tour",
    "get_config",
    "has_config",
    "list_roles",
    "reset_registry",
]


class Role(str, Enum):
    ADMIN = "admin"
    NURSE = "nurse"
    DOCTOR = "doctor"
    LAB_TECHNICIAN = "lab_technician"
    PHARMACIST = "pharmacist"
    RESEARCHER = "researcher"


@dataclass(frozen=True)
class TourStep:
    id: str
    title: str
    description: str
    narration_text: str
    target_selector: Optional[str] = None  # e.g. '[data-tour="patients"]'


@dataclass(frozen=True)
class RoleTourConfig:
    overview_narration: str
    steps: Tuple[TourStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # accept lists from callers but store an immutable sequence
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))

    def __len__(self) -> int:
        return len(self.steps)

    def step_ids(self) -> List[str]:  # convenience
        return [s.id for s in self.steps]


_registry: Dict[str, RoleTourConfig] = {}
_loaded = False


def _key(role: str | Role) -> str:
    return role.value if isinstance(role, Role) else str(role)


def _validate(role: str, steps: Sequence[TourStep]) -> None:
    if not steps:
        raise ValueError(f"Tour for role {role!r} has no steps")
    ids = set()
    for step in steps:
        if not step.id:
            raise ValueError(f"Step with empty id in tour for role {role!r}")
        if step.id in ids:
            raise ValueError(f"Duplicate step id {step.id} in tour for role {role!r}")
        ids.add(step.id)


def _ensure_loaded() -> None:
    global _loaded
    if _loaded:
        return
    from gui.design.tour_content import BUILTIN_TOURS  # local import: content depends on this module

    _loaded = True
    for role, config in BUILTIN_TOURS.items():
        register_role_tour(role, config)


def register_role_tour(
    role: str | Role, config: RoleTourConfig, *, allow_override: bool = False
) -> None:
    _ensure_loaded()
    key = _key(role)
    if key in _registry and not allow_override:
        raise ValueError(f"Tour already registered for role: {key}")
    _validate(key, config.steps)
    _registry[key] = config


def get_config(role: str | Role | None) -> RoleTourConfig:
    """Return the tour for ``role`` or the default role's tour if it has none."""
    _ensure_loaded()
    key = _key(role) if role is not None else DEFAULT_ROLE
    config = _registry.get(key)
    if config is None:
        return _registry[DEFAULT_ROLE]
    return config


def has_config(role: str | Role) -> bool:
    _ensure_loaded()
    return _key(role) in _registry


def list_roles() -> List[str]:
    _ensure_loaded()
    return list(_registry.keys())


def reset_registry() -> None:
    """Drop custom registrations and reload the built-in content."""
    global _loaded
    _registry.clear()
    _loaded = False
    _ensure_loaded()
