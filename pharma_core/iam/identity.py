# pharma_core/iam/identity.py
"""
Identity boundary: turns an authenticated request into an explicit actor.

Services never read the request user themselves; views resolve the actor once
and pass its ids down.
"""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rest_framework.exceptions import NotAuthenticated

from pharma_core.iam.models import UserProfile


@dataclass(frozen=True)
class Actor:
    user_id: int
    site_id: UUID | None = None


def current_actor(request) -> Actor:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        raise NotAuthenticated()

    profile = UserProfile.objects.filter(user_id=user.id, is_active=True).only("assigned_site_id").first()
    return Actor(user_id=user.id, site_id=profile.assigned_site_id if profile else None)
