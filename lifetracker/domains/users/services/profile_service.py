"""User profile services; the profile document id is the user id."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from lifetracker.core.utils.dates import utc_now_iso
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.documents import merge_update
from lifetracker.datastore.queries import find_items, read_or_none

logger = logging.getLogger(__name__)


def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    return read_or_none(get_container("users"), user_id, user_id)


def find_profile_by_email(email: str) -> Optional[Dict[str, Any]]:
    matches = find_items(get_container("users"), email=email)
    return matches[0] if matches else None


def get_or_create_profile(
    user_id: str, *, email: Optional[str] = None, display_name: Optional[str] = None
) -> Dict[str, Any]:
    """Return the caller's profile, creating an empty one on first access."""
    profile = get_profile(user_id)
    if profile:
        return profile
    now = utc_now_iso()
    profile = {
        "id": user_id,
        "userId": user_id,
        "email": email,
        "displayName": display_name,
        "preferences": {},
        "createdAt": now,
        "updatedAt": now,
    }
    logger.info("Creating profile for %s", user_id)
    return get_container("users").upsert_item(body=profile)


def update_profile(user_id: str, **fields: Any) -> Dict[str, Any]:
    profile = get_or_create_profile(user_id)
    changes = dict(fields)
    if "preferences" in changes:
        changes["preferences"] = {**(profile.get("preferences") or {}), **(changes["preferences"] or {})}
    return get_container("users").replace_item(item=user_id, body=merge_update(profile, changes))
