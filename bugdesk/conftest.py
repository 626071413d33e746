import pytest
from rest_framework.test import APIClient

from accounts.models import User
from accounts.services.token_service import issue_token
from tracking.services.project import ProjectService


def make_user(email, name="Tester", password="pass1234"):
    return User.objects.create_user(email=email, password=password, name=name)


@pytest.fixture
def owner(db):
    return make_user("owner@example.com", name="Owner")


@pytest.fixture
def dev(db):
    return make_user("dev@example.com", name="Dev")


@pytest.fixture
def viewer(db):
    return make_user("viewer@example.com", name="Viewer")


@pytest.fixture
def outsider(db):
    return make_user("outsider@example.com", name="Outsider")


@pytest.fixture
def project(owner):
    return ProjectService.create_project(owner=owner, name="Alpha", description="first project")


@pytest.fixture
def staffed_project(project, owner, dev, viewer):
    # owner=admin, dev=developer, viewer=viewer
    ProjectService.add_members(
        project_id=project.id,
        actor=owner,
        candidates=[
            {"user": str(dev.id), "role": "developer"},
            {"user": str(viewer.id), "role": "viewer"},
        ],
    )
    return project


@pytest.fixture
def client_for():
    """APIClient carrying a real bearer token for the given user."""
    def _make(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client
    return _make


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    settings.PUBLIC_BASE_URL = ""
    return tmp_path
