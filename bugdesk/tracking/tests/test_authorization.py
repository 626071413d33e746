import itertools
from types import SimpleNamespace

import pytest
from django.core.exceptions import PermissionDenied

from accounts.models import User
from tracking.models import ProjectRole, Ticket
from tracking.services import authorization
from tracking.services.authorization import TicketAccess, decide

ROLES = [ProjectRole.VIEWER, ProjectRole.DEVELOPER, ProjectRole.ADMIN]


def _members(*pairs):
    return [SimpleNamespace(user_id=uid, role=role) for uid, role in pairs]


@pytest.mark.parametrize("held,required", list(itertools.product(ROLES, ROLES)))
def test_decide_is_rank_threshold(held, required):
    members = _members(("u1", held))
    assert decide("u1", members, required) == (authorization.rank(held) >= authorization.rank(required))


@pytest.mark.parametrize("required", ROLES)
def test_decide_is_monotonic(required):
    members_by_role = [_members(("u1", role)) for role in ROLES]
    results = [decide("u1", m, required) for m in members_by_role]
    # once allowed, every higher rank is allowed too
    assert results == sorted(results)


def test_decide_denies_non_member_and_uses_first_entry():
    assert decide("ghost", _members(("u1", ProjectRole.ADMIN)), ProjectRole.VIEWER) is False
    members = _members(("u1", ProjectRole.VIEWER), ("u1", ProjectRole.ADMIN))
    assert decide("u1", members, ProjectRole.ADMIN) is False


def test_policy_table():
    assert authorization.POLICY == {
        ("project", "view"): ProjectRole.VIEWER,
        ("project", "add_members"): ProjectRole.ADMIN,
        ("ticket", "view"): ProjectRole.VIEWER,
        ("ticket", "edit"): ProjectRole.ADMIN,
        ("ticket", "delete"): ProjectRole.ADMIN,
    }


@pytest.mark.django_db
def test_global_admin_role_grants_nothing(project, outsider):
    outsider.role = User.Role.ADMIN
    outsider.save()

    assert not authorization.is_allowed(outsider, authorization.PROJECT, authorization.VIEW, project)
    with pytest.raises(PermissionDenied):
        authorization.require(outsider, authorization.PROJECT, authorization.ADD_MEMBERS, project)


@pytest.mark.django_db
def test_ticket_access_matrix(staffed_project, owner, dev, viewer, outsider):
    ticket = Ticket.objects.create(project=staffed_project, title="T", created_by=dev)
    ticket.assignees.add(outsider)

    creator = TicketAccess(dev, ticket)
    assert (creator.can_view, creator.can_edit_fields, creator.can_delete) == (True, True, True)

    admin = TicketAccess(owner, ticket)
    assert (admin.can_edit_fields, admin.can_delete) == (True, True)

    member = TicketAccess(viewer, ticket)
    assert (member.can_view, member.can_change_status, member.can_delete) == (True, False, False)

    # assignee outside the project: may view and move status, nothing else
    assignee = TicketAccess(outsider, ticket)
    assert (assignee.can_view, assignee.can_change_status) == (True, True)
    assert (assignee.can_edit_fields, assignee.can_delete) == (False, False)
