import uuid

import pytest
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404

from tracking.models import ProjectMember
from tracking.selectors.project import ProjectSelector
from tracking.services.project import INVALID_MEMBERS_MESSAGE, ProjectService


def _roles(project):
    return [(m.user_id, m.role) for m in ProjectMember.objects.filter(project=project).order_by('created_at', 'id')]


@pytest.mark.django_db
def test_create_project_owner_is_sole_admin(owner):
    project = ProjectService.create_project(owner=owner, name="Beta")
    assert project.created_by == owner
    assert _roles(project) == [(owner.id, "admin")]


@pytest.mark.django_db
def test_add_members_then_repeat_is_idempotent(project, owner, dev):
    candidates = [{"user": str(dev.id), "role": "developer"}]

    _, message, changed = ProjectService.add_members(project_id=project.id, actor=owner, candidates=candidates)
    assert (message, changed) == ("Members added successfully.", True)

    _, message, changed = ProjectService.add_members(
        project_id=project.id, actor=owner, candidates=[{"user": str(dev.id), "role": "admin"}]
    )
    assert (message, changed) == ("All provided users are already members or invalid.", False)
    # no role upgrade
    assert _roles(project) == [(owner.id, "admin"), (dev.id, "developer")]


@pytest.mark.django_db
def test_add_members_dedups_within_batch(project, owner, dev):
    ProjectService.add_members(project_id=project.id, actor=owner, candidates=[
        {"user": str(dev.id), "role": "viewer"},
        {"user": str(dev.id), "role": "admin"},
    ])
    assert _roles(project) == [(owner.id, "admin"), (dev.id, "viewer")]


@pytest.mark.django_db
def test_add_members_requires_project_admin(staffed_project, dev, outsider):
    with pytest.raises(PermissionDenied):
        ProjectService.add_members(
            project_id=staffed_project.id, actor=dev,
            candidates=[{"user": str(outsider.id), "role": "viewer"}]
        )


@pytest.mark.django_db
@pytest.mark.parametrize("candidates", [
    None,
    "dev",
    [{"user": "not-an-id", "role": "viewer"}],
    [{"user": str(uuid.uuid4()), "role": "owner"}],
    [{"role": "viewer"}],
])
def test_add_members_rejects_malformed_batch(project, owner, candidates):
    with pytest.raises(ValidationError) as exc:
        ProjectService.add_members(project_id=project.id, actor=owner, candidates=candidates)
    assert exc.value.messages == [INVALID_MEMBERS_MESSAGE]
    assert len(_roles(project)) == 1


@pytest.mark.django_db
def test_add_members_empty_and_unknown(project, owner):
    with pytest.raises(ValidationError) as exc:
        ProjectService.add_members(project_id=project.id, actor=owner, candidates=[])
    assert exc.value.messages == ["No new members provided to add."]

    with pytest.raises(ValidationError):
        ProjectService.add_members(
            project_id=project.id, actor=owner, candidates=[{"user": str(uuid.uuid4()), "role": "viewer"}]
        )


@pytest.mark.django_db
def test_add_members_bad_or_missing_project(owner, dev):
    candidates = [{"user": str(dev.id), "role": "viewer"}]
    with pytest.raises(ValidationError) as exc:
        ProjectService.add_members(project_id="123", actor=owner, candidates=candidates)
    assert exc.value.messages == ["Invalid project ID format."]

    with pytest.raises(Http404):
        ProjectService.add_members(project_id=uuid.uuid4(), actor=owner, candidates=candidates)


@pytest.mark.django_db
def test_projects_listed_for_owner_and_members(staffed_project, owner, viewer, outsider):
    other = ProjectService.create_project(owner=outsider, name="Other")

    assert list(ProjectSelector.get_projects_by_user(owner.id)) == [staffed_project]
    assert list(ProjectSelector.get_projects_by_user(viewer.id)) == [staffed_project]
    assert list(ProjectSelector.get_projects_by_user(outsider.id)) == [other]


@pytest.mark.django_db
def test_project_detail_needs_membership(staffed_project, viewer, outsider):
    assert ProjectSelector.get_project_detail(actor=viewer, project_id=str(staffed_project.id)) == staffed_project
    with pytest.raises(PermissionDenied) as exc:
        ProjectSelector.get_project_detail(actor=outsider, project_id=str(staffed_project.id))
    assert str(exc.value) == "Not authorized to view this project. You must be a project member."


@pytest.mark.django_db
def test_is_member_for_every_role(staffed_project, owner, dev, viewer, outsider):
    for user in (owner, dev, viewer):
        assert ProjectSelector.is_member(user.id, staffed_project) is True
    assert ProjectSelector.is_member(outsider.id, staffed_project) is False
