"""Role-filtered navigation entries.

Each entry optionally names the ``tour`` anchor its sidebar button carries so
tour steps can highlight it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from gui.design.onboarding_tour import Role

__all__ = ["NavItem", "NAV_ITEMS", "items_for_role"]

_ALL_STAFF = (Role.ADMIN, Role.NURSE, Role.DOCTOR, Role.LAB_TECHNICIAN, Role.PHARMACIST)
_CLINICAL = (Role.ADMIN, Role.NURSE, Role.DOCTOR)


@dataclass(frozen=True)
class NavItem:
    label: str
    path: str
    roles: Tuple[Role, ...]
    tour_id: Optional[str] = None

    def allows(self, role: str | None) -> bool:
        return role is not None and any(r.value == role for r in self.roles)


NAV_ITEMS: Tuple[NavItem, ...] = (
    NavItem("Dashboard", "/dashboard", _ALL_STAFF + (Role.RESEARCHER,), "dashboard"),
    NavItem("Patients", "/patients", _CLINICAL, "patients"),
    NavItem("Register Patient", "/patients/register", (Role.ADMIN, Role.NURSE)),
    NavItem("Vitals", "/vitals", (Role.ADMIN, Role.NURSE), "vitals"),
    NavItem("Appointments", "/appointments", _CLINICAL, "appointments"),
    NavItem("My Patients", "/doctor/patients", (Role.DOCTOR,), "my-patients"),
    NavItem("Consultations", "/doctor/consultations", (Role.DOCTOR,), "consultations"),
    NavItem("My Schedule", "/doctor/schedule", (Role.DOCTOR,), "schedule"),
    NavItem("Lab Orders", "/lab/orders", (Role.ADMIN, Role.DOCTOR, Role.LAB_TECHNICIAN), "lab-orders"),
    NavItem(
        "Lab Results", "/lab/results", (Role.ADMIN, Role.DOCTOR, Role.LAB_TECHNICIAN), "lab-results"
    ),
    NavItem(
        "Prescriptions",
        "/prescriptions",
        (Role.ADMIN, Role.DOCTOR, Role.PHARMACIST),
        "prescriptions",
    ),
    NavItem("Pharmacy", "/pharmacy", (Role.ADMIN, Role.PHARMACIST), "pharmacy"),
    NavItem("Dispensing History", "/pharmacy/history", (Role.PHARMACIST,), "history"),
    NavItem("Surgeries", "/surgeries", _CLINICAL, "surgery"),
    NavItem("ICU", "/icu", _CLINICAL, "icu"),
    NavItem("Follow-ups", "/follow-ups", _CLINICAL),
    NavItem("Reports", "/reports", _CLINICAL),
    NavItem("Research Dashboard", "/research", (Role.ADMIN, Role.RESEARCHER), "research"),
    NavItem("User Management", "/admin/users", (Role.ADMIN,), "users"),
    NavItem("Settings", "/settings", (Role.ADMIN,), "settings"),
)


def items_for_role(role: str | None) -> List[NavItem]:
    """Entries visible to ``role``; unknown roles see nothing."""
    return [item for item in NAV_ITEMS if item.allows(role)]
