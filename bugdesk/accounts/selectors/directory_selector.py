# -*- coding: utf-8 -*-
"""
Directory search: find users by partial email so they can be invited to a project.
The caller is always excluded; members of `project_id` are excluded when it resolves.
"""
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Optional, Set

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from accounts.models import User
from tracking.models import Project, ProjectMember

logger = logging.getLogger(__name__)


def _project_member_ids(project_id: Optional[str]) -> Set[str]:
    if not project_id:
        return set()
    try:
        pid = uuid.UUID(str(project_id))
    except ValueError:
        logger.warning("[directory] Ignoring malformed project id %r for member exclusion.", project_id)
        return set()

    try:
        if not Project.objects.filter(id=pid).exists():
            logger.warning("[directory] Project %s not found. Cannot exclude existing members.", pid)
            return set()
        return {str(uid) for uid in ProjectMember.objects.filter(project_id=pid).values_list("user_id", flat=True)}
    except DatabaseError as exc:
        logger.exception("[directory] Error fetching project members for exclusion: %s", exc)
        return set()


def search_users(*, actor: User, email: str, project_id: Optional[str] = None) -> List[Dict]:
    fragment = (email or "").strip()
    if not fragment:
        raise ValidationError("Email query parameter is required.")

    exclude_ids = _project_member_ids(project_id)
    exclude_ids.add(str(actor.id))

    users = (
        User.objects.filter(email__icontains=fragment, is_active=True)
        .exclude(id__in=exclude_ids)
        .order_by("email")
    )
    return [u.display() for u in users]
