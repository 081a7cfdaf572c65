# This project was developed with assistance from AI tools.
"""Permission catalog.

The permission strings are the contract shared with the dashboard front end
and with persisted role records, so their values must not change. Route
guarding is coarse: a front-end path is reduced to its first segment and
looked up in ``ROUTE_PERMISSIONS``; paths with no entry need no permission.
"""

import enum
from collections.abc import Iterable


class Permission(str, enum.Enum):
    # Menu items
    MENU_DASHBOARD = "menu:dashboard"
    MENU_CLIENTS = "menu:clients"
    MENU_PROPOSALS = "menu:proposals"
    MENU_PIPELINE = "menu:pipeline"
    MENU_TEAMS = "menu:teams"
    MENU_ROLES = "menu:roles"
    MENU_USERS = "menu:users"
    MENU_SETTINGS = "menu:settings"
    MENU_WEBHOOKS = "menu:webhooks"
    MENU_MY_REGISTRATION = "menu:my_registration"

    # Dashboard
    VIEW_DASHBOARD = "view:dashboard"
    VIEW_OWN_DASHBOARD = "view:own_dashboard"
    VIEW_TEAM_DASHBOARD = "view:team_dashboard"
    VIEW_ALL_DASHBOARD = "view:all_dashboard"

    # Clients
    VIEW_CLIENTS = "view:clients"
    VIEW_OWN_CLIENTS = "view:own_clients"
    VIEW_TEAM_CLIENTS = "view:team_clients"
    VIEW_ALL_CLIENTS = "view:all_clients"
    EDIT_CLIENTS = "edit:clients"
    DELETE_CLIENTS = "delete:clients"

    # Proposals
    VIEW_PROPOSALS = "view:proposals"
    VIEW_OWN_PROPOSALS = "view:own_proposals"
    VIEW_TEAM_PROPOSALS = "view:team_proposals"
    VIEW_ALL_PROPOSALS = "view:all_proposals"
    EDIT_PROPOSALS = "edit:proposals"
    APPROVE_PROPOSALS = "approve:proposals"
    REJECT_PROPOSALS = "reject:proposals"
    DELETE_PROPOSALS = "delete:proposals"

    # Pipeline
    VIEW_PIPELINE = "view:pipeline"
    VIEW_OWN_PIPELINE = "view:own_pipeline"
    VIEW_TEAM_PIPELINE = "view:team_pipeline"
    VIEW_ALL_PIPELINE = "view:all_pipeline"
    EDIT_PIPELINE = "edit:pipeline"

    # Users
    VIEW_USERS = "view:users"
    EDIT_USERS = "edit:users"
    DELETE_USERS = "delete:users"

    # Settings
    VIEW_SETTINGS = "view:settings"
    EDIT_SETTINGS = "edit:settings"

    # Webhooks
    VIEW_WEBHOOKS = "view:webhooks"
    EDIT_WEBHOOKS = "edit:webhooks"

    # Self-service
    VIEW_MY_REGISTRATION = "view:my_registration"
    VIEW_PROFILE = "view:profile"
    EDIT_PROFILE = "edit:profile"

    # Teams
    VIEW_TEAMS = "view:teams"
    EDIT_TEAMS = "edit:teams"
    DELETE_TEAMS = "delete:teams"

    # Roles
    VIEW_ROLES = "view:roles"
    EDIT_ROLES = "edit:roles"
    DELETE_ROLES = "delete:roles"


class ScopedResource(str, enum.Enum):
    """Resources whose visibility is qualified by own/team/all."""

    DASHBOARD = "dashboard"
    CLIENTS = "clients"
    PROPOSALS = "proposals"
    PIPELINE = "pipeline"


# Coarse "view X at all" checks are satisfied by any scoped variant.
# The pipeline coarse check stays literal.
COARSE_RESOURCES = frozenset(
    {ScopedResource.DASHBOARD, ScopedResource.CLIENTS, ScopedResource.PROPOSALS}
)

ALL_PERMISSIONS: tuple[str, ...] = tuple(p.value for p in Permission)

ROUTE_PERMISSIONS: dict[str, Permission] = {
    "/": Permission.MENU_DASHBOARD,
    "/dashboard": Permission.MENU_DASHBOARD,
    "/clients": Permission.MENU_CLIENTS,
    "/proposals": Permission.MENU_PROPOSALS,
    "/pipeline": Permission.MENU_PIPELINE,
    "/users": Permission.MENU_USERS,
    "/settings": Permission.MENU_SETTINGS,
    "/webhooks": Permission.MENU_WEBHOOKS,
    "/my-registration": Permission.MENU_MY_REGISTRATION,
    "/profile": Permission.VIEW_PROFILE,
    "/teams": Permission.MENU_TEAMS,
    "/roles": Permission.MENU_ROLES,
}


def permission_value(permission: Permission | str) -> str:
    """Plain string form of a permission, whether given as enum member or str."""
    return permission.value if isinstance(permission, Permission) else permission


def scoped_permission(level: str, resource: ScopedResource | str) -> str:
    """Return ``view:<level>_<resource>``, e.g. ``view:team_clients``."""
    return f"view:{level}_{ScopedResource(resource).value}"


def coarse_variants(permission: Permission | str) -> frozenset[str]:
    """All permission strings that satisfy ``permission`` as a coarse check."""
    value = permission_value(permission)
    action, _, resource = value.partition(":")
    if action != "view" or resource not in {r.value for r in COARSE_RESOURCES}:
        return frozenset({value})
    return frozenset(
        {
            f"view:{resource}",
            scoped_permission("own", resource),
            scoped_permission("team", resource),
            scoped_permission("all", resource),
        }
    )


def base_route(path: str) -> str:
    """Reduce a front-end path to its lookup key: ``/clients/42`` -> ``/clients``."""
    return "/".join(path.split("/")[:2]) or "/"


def required_permission_for_route(path: str) -> Permission | None:
    """Permission needed to reach ``path``; ``None`` means no permission required."""
    return ROUTE_PERMISSIONS.get(base_route(path))


def holds(granted: Iterable[str], permission: Permission | str) -> bool:
    """Literal membership; no wildcard or hierarchy."""
    return permission_value(permission) in set(granted)


def holds_coarse(granted: Iterable[str], permission: Permission | str) -> bool:
    """Membership of ``permission`` or any of its scoped variants."""
    return not set(granted).isdisjoint(coarse_variants(permission))
