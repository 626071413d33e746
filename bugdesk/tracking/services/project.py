# ============================================
# tracking/services/project.py
# ============================================
import logging
from typing import Dict, List, Tuple

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.http import Http404

from accounts.selectors.user_selector import missing_user_ids
from tracking.models import Project, ProjectMember, ProjectRole
from tracking.services import authorization
from tracking.validators import is_valid_id, parse_id

logger = logging.getLogger(__name__)

INVALID_MEMBERS_MESSAGE = (
    'Invalid new members format. Must be an array of '
    '{ user: ID, role: "admin" | "developer" | "viewer" }.'
)


class ProjectService:

    @staticmethod
    @transaction.atomic
    def create_project(
        *,
        owner,
        name: str,
        description: str = ''
    ) -> Project:
        """Create a new project; the owner becomes its only admin member"""

        project = Project.objects.create(
            name=name,
            description=description or '',
            created_by=owner
        )
        ProjectMember.objects.create(
            project=project,
            user=owner,
            role=ProjectRole.ADMIN
        )

        logger.info("[projects] %s created project %s", owner.id, project.id)
        return project

    @staticmethod
    def _validate_candidates(candidates) -> List[Dict]:
        """Whole batch is rejected on the first malformed entry"""
        if not isinstance(candidates, list):
            raise ValidationError(INVALID_MEMBERS_MESSAGE)

        for candidate in candidates:
            if (
                not isinstance(candidate, dict)
                or not is_valid_id(candidate.get('user'))
                or candidate.get('role') not in ProjectRole.values
            ):
                raise ValidationError(INVALID_MEMBERS_MESSAGE)

        if not candidates:
            raise ValidationError('No new members provided to add.')

        return candidates

    @staticmethod
    def add_members(*, project_id, actor, candidates) -> Tuple[Project, str, bool]:
        """
        Add members to project (project admins only).

        Candidates already in the project are skipped without changing their role.
        Returns (project, message, changed).
        """
        pid = parse_id(project_id, 'project')
        candidates = ProjectService._validate_candidates(candidates)

        project = Project.objects.filter(id=pid).first()
        if not project:
            raise Http404('Project not found.')

        authorization.require(
            actor, authorization.PROJECT, authorization.ADD_MEMBERS, project,
            message='Not authorized to add members to this project. Requires project admin privileges.'
        )

        unknown = missing_user_ids(parse_id(c['user'], 'user') for c in candidates)
        if unknown:
            raise ValidationError(f"Unknown user(s): {', '.join(unknown)}")

        # Read-modify-write without a lock: concurrent adds are last-write-wins
        current_ids = {
            str(uid) for uid in ProjectMember.objects.filter(project=project).values_list('user_id', flat=True)
        }
        to_add = []
        for candidate in candidates:
            user_id = str(parse_id(candidate['user'], 'user'))
            if user_id in current_ids:
                continue
            current_ids.add(user_id)
            to_add.append(ProjectMember(project=project, user_id=user_id, role=candidate['role']))

        if not to_add:
            return project, 'All provided users are already members or invalid.', False

        ProjectMember.objects.bulk_create(to_add)
        logger.info("[projects] %s added %d member(s) to %s", actor.id, len(to_add), project.id)
        return project, 'Members added successfully.', True
