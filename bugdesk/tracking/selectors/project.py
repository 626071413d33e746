# ============================================
# tracking/selectors/project.py
# ============================================
from typing import List, Optional

from django.core.exceptions import PermissionDenied
from django.db.models import Q, QuerySet
from django.http import Http404

from accounts.selectors.user_selector import get_users_map
from tracking.models import Project, ProjectMember
from tracking.services import authorization
from tracking.validators import parse_id


class ProjectSelector:

    @staticmethod
    def get_project_by_id(project_id) -> Optional[Project]:
        """Get single project by ID"""
        try:
            return Project.objects.select_related('created_by').get(id=project_id)
        except Project.DoesNotExist:
            return None

    @staticmethod
    def get_projects_by_user(user_id) -> QuerySet:
        """Get all projects where user is owner or member"""
        return Project.objects.filter(
            Q(created_by_id=user_id) | Q(members__user_id=user_id)
        ).distinct().order_by('-created_at')

    @staticmethod
    def is_member(user_id, project: Project) -> bool:
        """Any role counts"""
        return ProjectMember.objects.filter(project=project, user_id=user_id).exists()

    @staticmethod
    def get_project_detail(*, actor, project_id) -> Project:
        """Project visible to members of any role"""
        pid = parse_id(project_id, 'project')
        project = ProjectSelector.get_project_by_id(pid)
        if not project:
            raise Http404('Project not found.')

        if not authorization.is_allowed(actor, authorization.PROJECT, authorization.VIEW, project):
            raise PermissionDenied('Not authorized to view this project. You must be a project member.')

        return project

    @staticmethod
    def enrich_projects_with_users(projects: List[Project]) -> List[Project]:
        """Fetch and attach user data to projects"""
        projects = list(projects)
        memberships = {}
        user_ids = set()

        for member in ProjectMember.objects.filter(project__in=projects).order_by('created_at', 'id'):
            memberships.setdefault(member.project_id, []).append(member)
            user_ids.add(member.user_id)

        for project in projects:
            user_ids.add(project.created_by_id)

        users_dict = get_users_map(user_ids)

        for project in projects:
            project.owner_data = users_dict.get(str(project.created_by_id))
            project.members_data = [
                {'user': users_dict.get(str(m.user_id)), 'role': m.role}
                for m in memberships.get(project.id, [])
                if users_dict.get(str(m.user_id))
            ]

        return projects
