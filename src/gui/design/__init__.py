"""Design package: onboarding tour content and registry."""

from .onboarding_tour import (  # noqa: F401
    Role,
    TourStep,
    RoleTourConfig,
    register_role_tour,
    get_config,
    has_config,
    list_roles,
    reset_registry,
)
