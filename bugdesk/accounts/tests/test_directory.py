import logging

import pytest

from accounts.selectors.directory_selector import search_users
from django.core.exceptions import ValidationError


@pytest.mark.django_db
def test_search_is_case_insensitive_and_excludes_actor(owner, dev, viewer, outsider):
    emails = [u["email"] for u in search_users(actor=owner, email="EXAMPLE.COM")]
    assert owner.email not in emails
    assert emails == sorted([dev.email, viewer.email, outsider.email])


@pytest.mark.django_db
def test_search_excludes_project_members(staffed_project, owner, outsider):
    rows = search_users(actor=owner, email="example", project_id=str(staffed_project.id))
    assert rows == [{"id": str(outsider.id), "name": "Outsider", "email": outsider.email}]


@pytest.mark.django_db
def test_search_with_bad_project_id_degrades(owner, dev, caplog):
    with caplog.at_level(logging.WARNING, logger="accounts.selectors.directory_selector"):
        rows = search_users(actor=owner, email="dev@", project_id="not-an-id")
    assert [r["email"] for r in rows] == [dev.email]
    assert "[directory]" in caplog.text


@pytest.mark.django_db
def test_search_requires_fragment(owner):
    with pytest.raises(ValidationError) as exc:
        search_users(actor=owner, email="  ")
    assert exc.value.messages == ["Email query parameter is required."]


@pytest.mark.django_db
def test_search_api(client_for, staffed_project, owner, outsider):
    client = client_for(owner)
    resp = client.get(f"/api/users/search?email=OUT&projectId={staffed_project.id}")
    assert resp.status_code == 200
    assert resp.json() == [{"id": str(outsider.id), "name": "Outsider", "email": outsider.email}]

    missing = client.get("/api/users/search/")
    assert missing.status_code == 400
    assert missing.json() == {"detail": "Email query parameter is required."}
