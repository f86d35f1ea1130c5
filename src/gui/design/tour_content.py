"""Built-in CardioRegistry tour content, one walkthrough per role."""

from __future__ import annotations

from typing import Dict

from gui.design.onboarding_tour import Role, RoleTourConfig, TourStep

__all__ = ["BUILTIN_TOURS", "tour_selector"]


def tour_selector(name: str) -> str:
    return f'[data-tour="{name}"]'


def _step(
    id: str, title: str, description: str, narration: str, target: str | None = None
) -> TourStep:
    return TourStep(
        id=id,
        title=title,
        description=description,
        narration_text=narration,
        target_selector=tour_selector(target or id),
    )


DASHBOARD_STEP = _step(
    "dashboard",
    "Dashboard",
    "Your central hub showing key statistics, today's appointments, and pending tasks at a glance.",
    "This is your dashboard, showing key statistics and today's activities.",
)


BUILTIN_TOURS: Dict[str, RoleTourConfig] = {
    Role.ADMIN.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry, your comprehensive cardiovascular patient management "
            "system. As an administrator, you have full access to all modules including patient "
            "management, appointments, laboratory services, pharmacy, surgical operations, ICU "
            "care, reports, user management, and system settings. Let me walk you through each "
            "section."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "patients",
                "Patient Management",
                "Register new patients, view medical histories, and manage patient records.",
                "Patient Management allows you to register and manage all patient records.",
            ),
            _step(
                "appointments",
                "Appointments",
                "Schedule, track, and manage patient appointments with doctors.",
                "The Appointments module handles scheduling and appointment tracking.",
            ),
            _step(
                "lab",
                "Laboratory",
                "Order lab tests, enter results, and track test status.",
                "Laboratory services for ordering and managing lab tests.",
                target="lab-orders",
            ),
            _step(
                "pharmacy",
                "Pharmacy",
                "Manage prescriptions and medication dispensing.",
                "Pharmacy module for prescriptions and medication management.",
            ),
            _step(
                "surgery",
                "Surgery Suite",
                "Coordinate pre-operative, intra-operative, and post-operative care.",
                "Surgery Suite manages the complete surgical workflow.",
            ),
            _step(
                "users",
                "User Management",
                "Manage staff accounts, roles, and permissions.",
                "User Management for staff accounts and access control.",
            ),
            _step(
                "settings",
                "Settings",
                "Configure system preferences and customize the application.",
                "Settings to customize your system preferences.",
            ),
        ),
    ),
    Role.NURSE.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry. As a nurse, you can manage patient vitals, assist with "
            "appointments, and support pre and post-operative care. Let me show you the key "
            "features available to you."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "patients",
                "Patients",
                "View patient records and medical histories.",
                "Access patient records and medical information.",
            ),
            _step(
                "vitals",
                "Vitals",
                "Record and monitor patient vital signs.",
                "Record vital signs including blood pressure, heart rate, and temperature.",
            ),
            _step(
                "appointments",
                "Appointments",
                "View and manage patient appointments.",
                "Track and manage patient appointments.",
            ),
            _step(
                "icu",
                "ICU",
                "Monitor and care for ICU patients.",
                "ICU module for intensive care patient monitoring.",
            ),
        ),
    ),
    Role.DOCTOR.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry. As a doctor, you can manage your patients, conduct "
            "consultations, review lab results, and write prescriptions. Here's an overview of "
            "your available tools."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "my-patients",
                "My Patients",
                "View and manage your assigned patients.",
                "Access your assigned patients and their records.",
            ),
            _step(
                "consultations",
                "Consultations",
                "Conduct and document patient consultations.",
                "Document patient consultations and diagnoses.",
            ),
            _step(
                "schedule",
                "My Schedule",
                "View and manage your appointment schedule.",
                "Manage your daily and weekly schedule.",
            ),
            _step(
                "lab-results",
                "Lab Results",
                "Review patient laboratory results.",
                "Review laboratory test results for your patients.",
            ),
            _step(
                "prescriptions",
                "Prescriptions",
                "Write and manage patient prescriptions.",
                "Create and manage patient prescriptions.",
            ),
        ),
    ),
    Role.LAB_TECHNICIAN.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry. As a lab technician, you can view pending lab orders, "
            "enter test results, and manage laboratory workflow. Let me show you around."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "lab-orders",
                "Lab Orders",
                "View and process pending laboratory test orders.",
                "View and process pending lab test orders.",
            ),
            _step(
                "lab-results",
                "Lab Results",
                "Enter and verify laboratory test results.",
                "Enter and manage laboratory test results.",
            ),
        ),
    ),
    Role.PHARMACIST.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry. As a pharmacist, you can view prescriptions, dispense "
            "medications, and track dispensing history. Here's your workflow overview."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "prescriptions",
                "Prescriptions",
                "View pending prescriptions ready for dispensing.",
                "View prescriptions awaiting dispensing.",
            ),
            _step(
                "pharmacy",
                "Pharmacy",
                "Dispense medications and manage inventory.",
                "Dispense medications to patients.",
            ),
            _step(
                "history",
                "Dispensing History",
                "View past medication dispensing records.",
                "Review medication dispensing history.",
            ),
        ),
    ),
    Role.RESEARCHER.value: RoleTourConfig(
        overview_narration=(
            "Welcome to CardioRegistry. As a researcher, you can access anonymized data and "
            "research dashboards. Here's an overview of your available tools."
        ),
        steps=(
            DASHBOARD_STEP,
            _step(
                "research",
                "Research Dashboard",
                "Access research data and analytics.",
                "Access research analytics and anonymized data.",
            ),
        ),
    ),
}
