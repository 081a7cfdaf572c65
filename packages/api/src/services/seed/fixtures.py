# This project was developed with assistance from AI tools.
"""
Default role definitions for a fresh deployment.

Permission sets match the ones the back-office has been running with; the
display names are the Portuguese labels shown in the dashboard. Roles are
looked up by key, so renaming a role here never breaks existing users.
"""

import hashlib
import json

from db.enums import RoleKey

from ...core.permissions import Permission

ADMIN_PERMISSIONS: list[Permission] = [
    # Dashboard
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_OWN_DASHBOARD,
    Permission.VIEW_TEAM_DASHBOARD,
    Permission.VIEW_ALL_DASHBOARD,
    # Clients
    Permission.VIEW_CLIENTS,
    Permission.VIEW_OWN_CLIENTS,
    Permission.VIEW_TEAM_CLIENTS,
    Permission.VIEW_ALL_CLIENTS,
    Permission.EDIT_CLIENTS,
    Permission.DELETE_CLIENTS,
    # Proposals
    Permission.VIEW_PROPOSALS,
    Permission.VIEW_OWN_PROPOSALS,
    Permission.VIEW_TEAM_PROPOSALS,
    Permission.VIEW_ALL_PROPOSALS,
    Permission.EDIT_PROPOSALS,
    Permission.APPROVE_PROPOSALS,
    Permission.REJECT_PROPOSALS,
    Permission.DELETE_PROPOSALS,
    # Pipeline
    Permission.VIEW_PIPELINE,
    Permission.VIEW_OWN_PIPELINE,
    Permission.VIEW_TEAM_PIPELINE,
    Permission.VIEW_ALL_PIPELINE,
    Permission.EDIT_PIPELINE,
    # Administration
    Permission.VIEW_USERS,
    Permission.EDIT_USERS,
    Permission.DELETE_USERS,
    Permission.VIEW_SETTINGS,
    Permission.EDIT_SETTINGS,
    Permission.VIEW_WEBHOOKS,
    Permission.EDIT_WEBHOOKS,
    Permission.VIEW_PROFILE,
    Permission.EDIT_PROFILE,
    Permission.VIEW_TEAMS,
    Permission.EDIT_TEAMS,
    Permission.DELETE_TEAMS,
    Permission.VIEW_ROLES,
    Permission.EDIT_ROLES,
    Permission.DELETE_ROLES,
    # Menu
    Permission.MENU_DASHBOARD,
    Permission.MENU_CLIENTS,
    Permission.MENU_PROPOSALS,
    Permission.MENU_PIPELINE,
    Permission.MENU_TEAMS,
    Permission.MENU_ROLES,
    Permission.MENU_USERS,
    Permission.MENU_SETTINGS,
    Permission.MENU_WEBHOOKS,
]

MANAGER_PERMISSIONS: list[Permission] = [
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_OWN_DASHBOARD,
    Permission.VIEW_TEAM_DASHBOARD,
    Permission.VIEW_CLIENTS,
    Permission.VIEW_OWN_CLIENTS,
    Permission.VIEW_TEAM_CLIENTS,
    Permission.EDIT_CLIENTS,
    Permission.VIEW_PROPOSALS,
    Permission.VIEW_OWN_PROPOSALS,
    Permission.VIEW_TEAM_PROPOSALS,
    Permission.EDIT_PROPOSALS,
    Permission.APPROVE_PROPOSALS,
    Permission.REJECT_PROPOSALS,
    Permission.VIEW_PIPELINE,
    Permission.VIEW_OWN_PIPELINE,
    Permission.VIEW_TEAM_PIPELINE,
    Permission.EDIT_PIPELINE,
    Permission.VIEW_SETTINGS,
    Permission.EDIT_SETTINGS,
    Permission.VIEW_PROFILE,
    Permission.EDIT_PROFILE,
    Permission.VIEW_TEAMS,
    Permission.EDIT_TEAMS,
    Permission.MENU_DASHBOARD,
    Permission.MENU_CLIENTS,
    Permission.MENU_PROPOSALS,
    Permission.MENU_PIPELINE,
    Permission.MENU_TEAMS,
    Permission.MENU_SETTINGS,
]

# Partners refer clients; their scope is capped at own regardless of grants.
PARTNER_PERMISSIONS: list[Permission] = [
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_OWN_DASHBOARD,
    Permission.VIEW_CLIENTS,
    Permission.VIEW_OWN_CLIENTS,
    Permission.EDIT_CLIENTS,
    Permission.VIEW_PROPOSALS,
    Permission.VIEW_OWN_PROPOSALS,
    Permission.EDIT_PROPOSALS,
    Permission.VIEW_PIPELINE,
    Permission.VIEW_OWN_PIPELINE,
    Permission.VIEW_MY_REGISTRATION,
    Permission.VIEW_PROFILE,
    Permission.EDIT_PROFILE,
    Permission.MENU_DASHBOARD,
    Permission.MENU_CLIENTS,
    Permission.MENU_PROPOSALS,
    Permission.MENU_PIPELINE,
    Permission.MENU_MY_REGISTRATION,
]

CLIENT_PERMISSIONS: list[Permission] = [
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_OWN_DASHBOARD,
    Permission.VIEW_OWN_CLIENTS,
    Permission.VIEW_PROPOSALS,
    Permission.VIEW_OWN_PROPOSALS,
    Permission.VIEW_MY_REGISTRATION,
    Permission.VIEW_PROFILE,
    Permission.EDIT_PROFILE,
    Permission.MENU_DASHBOARD,
    Permission.MENU_PROPOSALS,
    Permission.MENU_MY_REGISTRATION,
]

DEFAULT_ROLES: list[dict] = [
    {"key": RoleKey.ADMIN.value, "name": "Administrador", "permissions": ADMIN_PERMISSIONS},
    {"key": RoleKey.MANAGER.value, "name": "Gerente", "permissions": MANAGER_PERMISSIONS},
    {"key": RoleKey.PARTNER.value, "name": "Parceiro", "permissions": PARTNER_PERMISSIONS},
    {"key": RoleKey.CLIENT.value, "name": "Cliente", "permissions": CLIENT_PERMISSIONS},
]


def role_permission_values(role: dict) -> list[str]:
    return [p.value for p in role["permissions"]]


def compute_config_hash() -> str:
    """SHA-256 over the default role definitions, for change detection."""
    payload = [
        {"key": r["key"], "name": r["name"], "permissions": role_permission_values(r)}
        for r in DEFAULT_ROLES
    ]
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()
