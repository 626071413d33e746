# ============================================
# tracking/services/authorization.py
# ============================================
"""
Project-scoped authorization.

Every check reduces to one primitive: the actor's project role rank compared
against a minimum rank looked up in POLICY by (resource kind, action).
Ticket rules add ownership/assignment on top of that table.
The user's global role is never consulted.
"""
from typing import Iterable, Optional

from django.core.exceptions import PermissionDenied

from tracking.models import Project, ProjectMember, ProjectRole, Ticket


ROLE_RANK = {
    ProjectRole.VIEWER: 0,
    ProjectRole.DEVELOPER: 1,
    ProjectRole.ADMIN: 2,
}

PROJECT = 'project'
TICKET = 'ticket'

VIEW = 'view'
ADD_MEMBERS = 'add_members'
EDIT = 'edit'
DELETE = 'delete'

POLICY = {
    (PROJECT, VIEW): ProjectRole.VIEWER,
    (PROJECT, ADD_MEMBERS): ProjectRole.ADMIN,
    (TICKET, VIEW): ProjectRole.VIEWER,
    (TICKET, EDIT): ProjectRole.ADMIN,
    (TICKET, DELETE): ProjectRole.ADMIN,
}


def rank(role: str) -> int:
    return ROLE_RANK[ProjectRole(role)]


def membership_role(memberships: Iterable, actor_id) -> Optional[str]:
    """Role of the first membership entry for actor_id, or None."""
    actor = str(actor_id)
    for member in memberships:
        if str(member.user_id) == actor:
            return member.role
    return None


def decide(actor_id, memberships: Iterable, required_role: str) -> bool:
    """Threshold check: allow iff the actor is a member with rank >= required."""
    role = membership_role(memberships, actor_id)
    if role is None:
        return False
    return rank(role) >= rank(required_role)


def project_memberships(project: Project) -> list:
    return list(ProjectMember.objects.filter(project=project).order_by('created_at', 'id'))


def is_allowed(actor, kind: str, action: str, project: Project, memberships: Optional[list] = None) -> bool:
    required = POLICY[(kind, action)]
    if memberships is None:
        memberships = project_memberships(project)
    return decide(actor.id, memberships, required)


def require(actor, kind: str, action: str, project: Project, message: str = 'Not authorized') -> None:
    if not is_allowed(actor, kind, action, project):
        raise PermissionDenied(message)


class TicketAccess:
    """Capabilities of one actor on one ticket, computed from a single membership read."""

    def __init__(self, actor, ticket: Ticket):
        self.actor = actor
        self.ticket = ticket
        self._memberships = project_memberships(ticket.project)
        self.is_creator = str(ticket.created_by_id) == str(actor.id)
        self.is_assignee = ticket.assignees.filter(id=actor.id).exists()

    def allowed(self, action: str) -> bool:
        return is_allowed(self.actor, TICKET, action, self.ticket.project, self._memberships)

    @property
    def can_view(self) -> bool:
        return self.is_creator or self.is_assignee or self.allowed(VIEW)

    @property
    def can_edit_fields(self) -> bool:
        return self.is_creator or self.allowed(EDIT)

    @property
    def can_change_status(self) -> bool:
        return self.can_edit_fields or self.is_assignee

    @property
    def can_delete(self) -> bool:
        return self.is_creator or self.allowed(DELETE)
