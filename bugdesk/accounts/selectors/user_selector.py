# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Dict, Iterable, List

from accounts.models import User


def get_users_map(user_ids: Iterable) -> Dict[str, Dict]:
    """
    Batch-resolve user ids to display dicts.
    Returns {str(user_id): {"id", "name", "email"}}; unknown ids are omitted.
    """
    ids = {str(uid) for uid in user_ids if uid}
    if not ids:
        return {}
    return {str(u.id): u.display() for u in User.objects.filter(id__in=ids)}


def missing_user_ids(user_ids: Iterable) -> List[str]:
    wanted = {str(uid) for uid in user_ids}
    found = {str(uid) for uid in User.objects.filter(id__in=wanted).values_list("id", flat=True)}
    return sorted(wanted - found)
