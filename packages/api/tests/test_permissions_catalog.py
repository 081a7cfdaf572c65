# This project was developed with assistance from AI tools.
"""Tests for the permission catalog, route table and coarse checks."""

import itertools

import pytest

from src.core.permissions import (
    ALL_PERMISSIONS,
    ROUTE_PERMISSIONS,
    Permission,
    base_route,
    coarse_variants,
    holds,
    holds_coarse,
    permission_value,
    required_permission_for_route,
)

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def test_catalog_strings_are_stable():
    """Persisted role records depend on these exact strings."""
    assert Permission.VIEW_TEAM_CLIENTS.value == "view:team_clients"
    assert Permission.MENU_MY_REGISTRATION.value == "menu:my_registration"
    assert Permission.APPROVE_PROPOSALS.value == "approve:proposals"
    assert Permission.DELETE_ROLES.value == "delete:roles"


def test_catalog_has_no_duplicates():
    assert len(ALL_PERMISSIONS) == len(set(ALL_PERMISSIONS))
    assert len(ALL_PERMISSIONS) == 49


def test_permission_value_accepts_enum_and_str():
    assert permission_value(Permission.VIEW_USERS) == "view:users"
    assert permission_value("view:users") == "view:users"


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/clients/42", "/clients"),
        ("/clients", "/clients"),
        ("/proposals/abc/edit", "/proposals"),
        ("/", "/"),
        ("", "/"),
    ],
)
def test_base_route(path, expected):
    """Only the first path segment is kept."""
    assert base_route(path) == expected


def test_route_lookup_by_prefix():
    assert required_permission_for_route("/users/123") == Permission.MENU_USERS
    assert required_permission_for_route("/my-registration") == Permission.MENU_MY_REGISTRATION
    assert required_permission_for_route("/") == Permission.MENU_DASHBOARD


def test_unmapped_route_requires_nothing():
    """Unmapped routes are allowed by default."""
    assert required_permission_for_route("/login") is None
    assert required_permission_for_route("/reports/2024") is None


def test_every_route_maps_to_catalog_permission():
    for permission in ROUTE_PERMISSIONS.values():
        assert permission.value in ALL_PERMISSIONS


# ---------------------------------------------------------------------------
# Literal and coarse checks
# ---------------------------------------------------------------------------


def test_holds_is_literal():
    """No hierarchy: an all-scope grant does not imply the bare view permission."""
    granted = ["view:all_clients"]
    assert holds(granted, "view:all_clients")
    assert not holds(granted, "view:clients")
    assert not holds([], Permission.VIEW_CLIENTS)


@pytest.mark.parametrize("resource", ["dashboard", "clients", "proposals"])
def test_coarse_check_every_combination(resource):
    """Coarse view is granted iff any of the four variants is held."""
    variants = [
        f"view:{resource}",
        f"view:own_{resource}",
        f"view:team_{resource}",
        f"view:all_{resource}",
    ]
    for mask in itertools.product([False, True], repeat=4):
        granted = [v for v, on in zip(variants, mask, strict=True) if on]
        assert holds_coarse(granted, f"view:{resource}") == any(mask), granted


def test_coarse_check_ignores_other_resources():
    assert not holds_coarse(["view:all_proposals"], "view:clients")


def test_pipeline_coarse_check_is_literal():
    """Scoped pipeline grants do not satisfy the coarse pipeline check."""
    assert coarse_variants("view:pipeline") == frozenset({"view:pipeline"})
    assert not holds_coarse(["view:own_pipeline"], Permission.VIEW_PIPELINE)
    assert holds_coarse(["view:pipeline"], Permission.VIEW_PIPELINE)


def test_coarse_non_view_permission_is_literal():
    assert coarse_variants(Permission.EDIT_CLIENTS) == frozenset({"edit:clients"})
