# This project was developed with assistance from AI tools.
"""
JWT authentication middleware.

Validates Bearer tokens against the identity provider's JWKS endpoint,
extracts the user identity and its role/team custom claims, resolves the
role's permissions and data scope, and provides FastAPI dependencies for
route-level permission guards.

Set AUTH_DISABLED=true to bypass validation (tests / local dev without an IdP).
"""

import asyncio
import logging
import time
from typing import Annotated

import httpx
import jwt
from db.enums import Collection, RoleKey
from fastapi import Depends, HTTPException, Request, status

from ..core.auth import full_data_scope
from ..core.config import settings
from ..core.permissions import ALL_PERMISSIONS, Permission, holds, holds_coarse, permission_value
from ..schemas.auth import TokenPayload, UserContext
from ..services.permissions import get_permission_resolver
from ..services.store import get_document_store

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# JWKS cache
# ---------------------------------------------------------------------------

_jwks_data: dict | None = None
_jwks_fetched_at: float = 0


def _fetch_jwks() -> dict:
    """Fetch the JSON Web Key Set from the identity provider. Raises on failure."""
    response = httpx.get(settings.AUTH_JWKS_URL, timeout=5)
    response.raise_for_status()
    return response.json()


def _get_jwks(force_refresh: bool = False) -> dict:
    """Return cached JWKS, refreshing if stale or forced."""
    global _jwks_data, _jwks_fetched_at  # noqa: PLW0603

    now = time.time()
    if _jwks_data is None or force_refresh or (now - _jwks_fetched_at) > settings.JWKS_CACHE_TTL:
        _jwks_data = _fetch_jwks()
        _jwks_fetched_at = now

    return _jwks_data


def _get_signing_key(token: str) -> jwt.PyJWK:
    """Find the signing key for the given token from the JWKS."""
    try:
        header = jwt.get_unverified_header(token)
        kid = header.get("kid")

        for force_refresh in (False, True):
            jwk_set = jwt.PyJWKSet.from_dict(_get_jwks(force_refresh=force_refresh))
            for key in jwk_set.keys:
                if key.key_id == kid:
                    return key
            # kid not found -- cache-bust and retry once (key rotation)

        raise jwt.InvalidTokenError(f"No matching key found for kid={kid}")

    except httpx.HTTPError as exc:
        logger.error("Failed to fetch JWKS from identity provider: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        ) from exc


# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------

def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def _decode_token(token: str) -> TokenPayload:
    """Validate and decode a JWT against the identity provider's JWKS."""
    signing_key = _get_signing_key(token)

    payload = jwt.decode(
        token,
        signing_key.key,
        algorithms=["RS256"],
        issuer=settings.AUTH_ISSUER,
        audience=settings.AUTH_AUDIENCE,
        options={"verify_aud": settings.AUTH_AUDIENCE is not None},
    )
    return TokenPayload(**payload)


async def _fill_from_user_record(payload: TokenPayload) -> TokenPayload:
    """Complete missing role/team claims from the denormalized user record.

    Older accounts were created before role claims were issued. A failed
    lookup leaves the claims as they are; the user then resolves to no
    permissions rather than failing authentication.
    """
    if payload.role_key and payload.team:
        return payload
    try:
        user_doc = await asyncio.wait_for(
            get_document_store().get_by_id(Collection.USERS.value, payload.sub),
            timeout=settings.STORE_TIMEOUT_SECONDS,
        )
    except Exception as exc:
        logger.error("User record lookup failed for %s: %s", payload.sub, exc)
        return payload
    if not user_doc:
        return payload

    return payload.model_copy(
        update={
            "email": payload.email or user_doc.get("email") or "",
            "name": payload.name or user_doc.get("name") or "",
            "role_key": payload.role_key or user_doc.get("role_key"),
            "role_id": payload.role_id or user_doc.get("role_id"),
            "role_name": payload.role_name or user_doc.get("role_name"),
            "team": payload.team or user_doc.get("team"),
        }
    )


async def build_user_context(payload: TokenPayload) -> UserContext:
    """Resolve permissions and data scope for an authenticated identity."""
    payload = await _fill_from_user_record(payload)
    if not payload.role_key:
        logger.warning("User %s has no role assigned; denying by default", payload.sub)

    resolver = get_permission_resolver()
    permissions = await resolver.refresh(payload.role_key, email=payload.email)
    data_scope = resolver.data_scope_for(payload.role_key, email=payload.email)

    return UserContext(
        user_id=payload.sub,
        email=payload.email,
        name=payload.name,
        role_key=payload.role_key,
        role_id=payload.role_id,
        role_name=payload.role_name,
        team=payload.team,
        permissions=frozenset(permissions),
        data_scope=data_scope,
    )


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

_DISABLED_USER = UserContext(
    user_id="dev-user",
    email="dev@credit-backoffice.local",
    name="Dev User",
    role_key=RoleKey.ADMIN.value,
    role_name="Administrador",
    permissions=frozenset(ALL_PERMISSIONS),
    data_scope=full_data_scope(),
)


async def get_current_user(request: Request) -> UserContext:
    """FastAPI dependency: validate JWT and return UserContext.

    When AUTH_DISABLED=true, returns a dev admin user without token validation.
    """
    if settings.AUTH_DISABLED:
        return _DISABLED_USER

    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = _decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except jwt.InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    return await build_user_context(payload)


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


def _deny(user: UserContext, required: list[str]) -> HTTPException:
    logger.warning(
        "Permission denied: user=%s role=%s attempted route requiring %s",
        user.user_id,
        user.role_key,
        required,
    )
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions",
    )


def require_permission(*required: Permission | str):
    """Dependency factory: the caller must literally hold every listed permission.

    Usage:
        @router.get("/roles", dependencies=[Depends(require_permission(Permission.VIEW_ROLES))])
    """
    values = [permission_value(p) for p in required]

    async def _check(user: CurrentUser) -> UserContext:
        if not all(holds(user.permissions, p) for p in values):
            raise _deny(user, values)
        return user

    return _check


def require_coarse_permission(permission: Permission | str):
    """Dependency factory: the caller must hold ``permission`` or a scoped variant of it."""
    value = permission_value(permission)

    async def _check(user: CurrentUser) -> UserContext:
        if not holds_coarse(user.permissions, value):
            raise _deny(user, [value])
        return user

    return _check
