# This project was developed with assistance from AI tools.
"""Shared data scope filtering for client and proposal listings.

Historical records carry ownership in several redundant fields (creator id,
creator email, inviter, partner/client email, team id/name/code), none of
which is reliably populated. Ownership is therefore modelled as an ordered
tuple of ``OwnershipSignal`` entries evaluated with OR; supporting a new
signal means adding an entry, not a branch.

``filter_visible`` is a pure function of (records, viewer, scope). The
async helpers below it build the ``Viewer`` snapshot from the document
store; lookup failures shrink the snapshot instead of raising.
"""

import asyncio
import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from db.enums import Collection
from db.store import DocumentStore

from ..schemas.auth import ScopeLevel, UserContext
from ..schemas.scope import TeamSnapshot, Viewer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnershipSignal:
    """A record field matched against viewer (``own``) and team (``team``) values.

    ``own`` names attributes of ``Viewer``; ``team`` names attributes of
    ``TeamSnapshot``. Either may point at a scalar or a set of values.
    """

    field: str
    own: tuple[str, ...] = ()
    team: tuple[str, ...] = ()


CLIENT_SIGNALS: tuple[OwnershipSignal, ...] = (
    OwnershipSignal("user_id", own=("user_id",), team=("member_ids",)),
    OwnershipSignal("created_by", own=("user_id", "email"), team=("member_ids", "member_emails")),
    OwnershipSignal("inviter_user_id", own=("user_id",), team=("member_ids",)),
    OwnershipSignal("partner_email", own=("email",), team=("member_emails",)),
    OwnershipSignal("team_id", team=("team_id",)),
    OwnershipSignal("team_name", team=("name",)),
    OwnershipSignal("team_code", team=("team_code",)),
)

PROPOSAL_SIGNALS: tuple[OwnershipSignal, ...] = (
    OwnershipSignal("user_id", own=("user_id",), team=("member_ids",)),
    OwnershipSignal("created_by", own=("email",), team=("member_emails",)),
    OwnershipSignal("inviter_user_id", own=("user_id",), team=("member_ids",)),
    OwnershipSignal("client_id", own=("user_id", "referred_client_ids")),
    OwnershipSignal("partner_email", own=("email",), team=("member_emails",)),
    OwnershipSignal("client_email", own=("email",), team=("member_emails",)),
    OwnershipSignal("team_id", team=("team_id",)),
    OwnershipSignal("team_name", team=("name",)),
    OwnershipSignal("team_code", team=("team_code",)),
)


def _record_value(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def _collect(source: Any, attrs: tuple[str, ...]) -> frozenset:
    if source is None:
        return frozenset()
    values = set()
    for attr in attrs:
        value = getattr(source, attr, None)
        if isinstance(value, set | frozenset | list | tuple):
            values.update(v for v in value if v)
        elif value:
            values.add(value)
    return frozenset(values)


def _matchers(
    viewer: Viewer, signals: Iterable[OwnershipSignal], *, include_team: bool
) -> list[tuple[str, frozenset]]:
    matchers = []
    for signal in signals:
        values = _collect(viewer, signal.own)
        if include_team:
            values |= _collect(viewer.team, signal.team)
        if values:
            matchers.append((signal.field, values))
    return matchers


def _matches(record: Any, matchers: list[tuple[str, frozenset]]) -> bool:
    for field, values in matchers:
        value = _record_value(record, field)
        if value and isinstance(value, Hashable) and value in values:
            return True
    return False


def filter_visible(
    records: Iterable[Any],
    viewer: Viewer,
    scope: ScopeLevel | None,
    signals: Iterable[OwnershipSignal],
) -> list[Any]:
    """Return the records ``viewer`` may see under ``scope``, in input order.

    ``all`` keeps everything, ``None`` keeps nothing. ``team`` matches every
    ``own`` signal plus the team ones, so its result always contains the
    ``own`` result.
    """
    if scope is None:
        return []
    if scope == ScopeLevel.ALL:
        return list(records)

    matchers = _matchers(viewer, signals, include_team=scope == ScopeLevel.TEAM)
    return [record for record in records if _matches(record, matchers)]


def is_visible(
    record: Any, viewer: Viewer, scope: ScopeLevel | None, signals: Iterable[OwnershipSignal]
) -> bool:
    return bool(filter_visible([record], viewer, scope, signals))


# ---------------------------------------------------------------------------
# Viewer resolution
# ---------------------------------------------------------------------------


async def resolve_team(
    store: DocumentStore, team_id: str | None, *, timeout: float = 5.0
) -> TeamSnapshot | None:
    """Load a team and resolve its members to ids and emails.

    Membership is the union of the team's ``members`` list and users whose
    ``team`` field points at it. Returns None when the lookup fails, which
    leaves the viewer with own-level matching only.
    """
    if not team_id:
        return None
    try:
        team_doc = await asyncio.wait_for(
            store.get_by_id(Collection.TEAMS.value, team_id), timeout=timeout
        )
        member_docs = await asyncio.wait_for(
            store.query_by_field(Collection.USERS.value, "team", team_id), timeout=timeout
        )

        members = (team_doc or {}).get("members") or []
        member_ids = {m for m in members if isinstance(m, str) and m}
        emails = {}
        for doc in member_docs:
            member_ids.add(doc["id"])
            emails[doc["id"]] = doc.get("email")

        for member_id in sorted(member_ids - emails.keys()):
            user_doc = await asyncio.wait_for(
                store.get_by_id(Collection.USERS.value, member_id), timeout=timeout
            )
            emails[member_id] = (user_doc or {}).get("email")
    except TimeoutError:
        logger.error("Timed out resolving team %s", team_id)
        return None
    except Exception as exc:
        logger.error("Failed to resolve team %s: %s", team_id, exc)
        return None

    if team_doc is None:
        logger.warning("Team %s not found; matching by team id and user records only", team_id)

    return TeamSnapshot(
        team_id=team_id,
        name=(team_doc or {}).get("name"),
        team_code=(team_doc or {}).get("team_code"),
        member_ids=frozenset(member_ids),
        member_emails=frozenset(e for e in emails.values() if e),
    )


async def referred_client_ids(
    store: DocumentStore, user_id: str, *, timeout: float = 5.0
) -> frozenset[str]:
    """Ids of client registrations the user invited."""
    try:
        docs = await asyncio.wait_for(
            store.query_by_field(Collection.REGISTRATIONS.value, "inviter_user_id", user_id),
            timeout=timeout,
        )
    except TimeoutError:
        logger.error("Timed out loading referred clients for %s", user_id)
        return frozenset()
    except Exception as exc:
        logger.error("Failed to load referred clients for %s: %s", user_id, exc)
        return frozenset()
    return frozenset(doc["id"] for doc in docs if doc.get("id"))


async def build_viewer(
    store: DocumentStore,
    user: UserContext,
    scope: ScopeLevel | None,
    *,
    with_referrals: bool = False,
    timeout: float = 5.0,
) -> Viewer:
    """Snapshot what the filter needs for ``user`` at ``scope``.

    Team membership is only resolved for team scope; referrals only when
    asked (proposal listings) and the scope is not already ``all``.
    """
    team = None
    if scope == ScopeLevel.TEAM:
        team = await resolve_team(store, user.team, timeout=timeout)

    referrals = frozenset()
    if with_referrals and scope in (ScopeLevel.OWN, ScopeLevel.TEAM):
        referrals = await referred_client_ids(store, user.user_id, timeout=timeout)

    return Viewer(
        user_id=user.user_id,
        email=user.email,
        role_key=user.role_key,
        team=team,
        referred_client_ids=referrals,
    )


async def fetch_visible(
    store: DocumentStore,
    user: UserContext,
    collection: Collection,
    scope: ScopeLevel | None,
    signals: Iterable[OwnershipSignal],
    *,
    with_referrals: bool = False,
    timeout: float = 5.0,
) -> list[dict]:
    """Load ``collection`` and keep what ``user`` may see under ``scope``.

    A denied or failed load yields an empty list; listings render empty
    rather than erroring.
    """
    if scope is None:
        logger.debug("User %s has no scope on %s", user.user_id, collection.value)
        return []
    try:
        docs = await asyncio.wait_for(store.list_collection(collection.value), timeout=timeout)
    except TimeoutError:
        logger.error("Timed out loading %s", collection.value)
        return []
    except Exception as exc:
        logger.error("Failed to load %s: %s", collection.value, exc)
        return []

    viewer = await build_viewer(
        store, user, scope, with_referrals=with_referrals, timeout=timeout
    )
    return filter_visible(docs, viewer, scope, signals)


def newest_first(records: list[dict]) -> list[dict]:
    """Sort by ``created_at`` descending; undated records go last."""
    dated = [r for r in records if r.get("created_at") is not None]
    undated = [r for r in records if r.get("created_at") is None]
    return sorted(dated, key=lambda r: r["created_at"], reverse=True) + undated
