"""Tests for document CRUD and search endpoints."""

import pytest
from fastapi.testclient import TestClient


def auth(token: str) -> dict:
    return {"x-access-token": token}


@pytest.fixture
def jane(signup):
    return signup("jane")


@pytest.fixture
def bob(signup):
    return signup("bob")


def _create(client, token, title, content="some content", access="public"):
    response = client.post(
        "/documents",
        headers=auth(token),
        json={"title": title, "content": content, "access": access},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    def test_requester_becomes_owner(self, client: TestClient, jane):
        user, token = jane
        doc = _create(client, token, "Plan")
        assert doc["ownerId"] == user["id"]
        assert doc["access"] == "public"

    def test_access_defaults_to_public(self, client, jane):
        _, token = jane
        response = client.post("/documents", headers=auth(token), json={"title": "t", "content": "c"})
        assert response.json()["access"] == "public"

    def test_role_is_a_valid_access_level(self, client, jane):
        _, token = jane
        assert _create(client, token, "Team", access="role")["access"] == "role"

    def test_unknown_access_level_is_rejected(self, client, jane):
        _, token = jane
        response = client.post(
            "/documents", headers=auth(token), json={"title": "t", "content": "c", "access": "secret"}
        )
        assert response.status_code == 400

    def test_title_is_required(self, client, jane):
        _, token = jane
        response = client.post("/documents", headers=auth(token), json={"content": "c"})
        assert response.status_code == 400
        assert response.json()["message"] == "title is required."

    def test_requires_token(self, client):
        response = client.post("/documents", json={"title": "t", "content": "c"})
        assert response.status_code == 401


class TestRead:
    def test_private_document_hidden_from_others(self, client, jane, bob):
        _, jane_token = jane
        _, bob_token = bob
        doc = _create(client, jane_token, "Diary", access="private")
        assert client.get(f"/documents/{doc['id']}", headers=auth(jane_token)).status_code == 200
        assert client.get(f"/documents/{doc['id']}", headers=auth(bob_token)).status_code == 403

    def test_admin_reads_private_documents(self, client, jane, admin):
        _, jane_token = jane
        _, admin_token = admin
        doc = _create(client, jane_token, "Diary", access="private")
        assert client.get(f"/documents/{doc['id']}", headers=auth(admin_token)).status_code == 200

    @pytest.mark.parametrize("access", ["public", "role"])
    def test_shared_documents_readable_by_others(self, client, jane, bob, access):
        _, jane_token = jane
        _, bob_token = bob
        doc = _create(client, jane_token, "Shared", access=access)
        assert client.get(f"/documents/{doc['id']}", headers=auth(bob_token)).status_code == 200

    def test_missing_document(self, client, jane):
        _, token = jane
        response = client.get("/documents/999", headers=auth(token))
        assert response.status_code == 404
        assert response.json()["message"] == "Document Not found."

    def test_listing_respects_visibility(self, client, jane, bob):
        _, jane_token = jane
        _, bob_token = bob
        _create(client, jane_token, "Jane private", access="private")
        _create(client, jane_token, "Jane public")
        _create(client, bob_token, "Bob private", access="private")

        response = client.get("/documents", headers=auth(bob_token))
        titles = [row["title"] for row in response.json()["documents"]["rows"]]
        assert titles == ["Bob private", "Jane public"]

    def test_documents_of_a_user(self, client, jane, bob):
        jane_user, jane_token = jane
        _, bob_token = bob
        _create(client, jane_token, "Jane private", access="private")
        _create(client, jane_token, "Jane public")
        _create(client, bob_token, "Bob public")

        response = client.get(f"/users/{jane_user['id']}/documents", headers=auth(bob_token))
        assert response.status_code == 200
        assert [row["title"] for row in response.json()["documents"]["rows"]] == ["Jane public"]

        response = client.get(f"/users/{jane_user['id']}/documents", headers=auth(jane_token))
        assert response.json()["documents"]["count"] == 2

    def test_documents_of_missing_user(self, client, jane):
        _, token = jane
        assert client.get("/users/999/documents", headers=auth(token)).status_code == 404


class TestUpdate:
    def test_owner_updates(self, client, jane):
        _, token = jane
        doc = _create(client, token, "Draft")
        response = client.put(
            f"/documents/{doc['id']}", headers=auth(token), json={"title": "Final", "access": "private"}
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Final"
        assert response.json()["access"] == "private"
        assert response.json()["content"] == "some content"

    def test_admin_updates_any_document(self, client, jane, admin):
        _, jane_token = jane
        _, admin_token = admin
        doc = _create(client, jane_token, "Draft", access="private")
        response = client.put(f"/documents/{doc['id']}", headers=auth(admin_token), json={"title": "Reviewed"})
        assert response.status_code == 200
        assert response.json()["title"] == "Reviewed"

    def test_non_owner_is_forbidden(self, client, jane, bob):
        _, jane_token = jane
        _, bob_token = bob
        doc = _create(client, jane_token, "Draft")
        response = client.put(f"/documents/{doc['id']}", headers=auth(bob_token), json={"title": "Mine"})
        assert response.status_code == 403
        assert response.json()["message"] == "You are restricted from performing this action."

    def test_owner_cannot_change_owner(self, client, jane, bob):
        _, jane_token = jane
        bob_user, _ = bob
        doc = _create(client, jane_token, "Draft")
        response = client.put(f"/documents/{doc['id']}", headers=auth(jane_token), json={"ownerId": bob_user["id"]})
        assert response.status_code == 403
        assert response.json()["message"] == "You cannot update ownerId."

    def test_admin_cannot_change_owner(self, client, jane, bob, admin):
        _, jane_token = jane
        bob_user, _ = bob
        _, admin_token = admin
        doc = _create(client, jane_token, "Draft")
        response = client.put(f"/documents/{doc['id']}", headers=auth(admin_token), json={"ownerId": bob_user["id"]})
        assert response.status_code == 403
        check = client.get(f"/documents/{doc['id']}", headers=auth(admin_token))
        assert check.json()["ownerId"] != bob_user["id"]

    def test_update_missing_document(self, client, jane):
        _, token = jane
        response = client.put("/documents/999", headers=auth(token), json={"title": "x"})
        assert response.status_code == 404


class TestDelete:
    def test_owner_deletes(self, client, jane):
        _, token = jane
        doc = _create(client, token, "Draft")
        assert client.delete(f"/documents/{doc['id']}", headers=auth(token)).status_code == 200
        assert client.get(f"/documents/{doc['id']}", headers=auth(token)).status_code == 404

    def test_admin_deletes(self, client, jane, admin):
        _, jane_token = jane
        _, admin_token = admin
        doc = _create(client, jane_token, "Draft")
        assert client.delete(f"/documents/{doc['id']}", headers=auth(admin_token)).status_code == 200

    def test_non_owner_is_forbidden(self, client, jane, bob):
        _, jane_token = jane
        _, bob_token = bob
        doc = _create(client, jane_token, "Draft")
        assert client.delete(f"/documents/{doc['id']}", headers=auth(bob_token)).status_code == 403


class TestSearch:
    @pytest.fixture
    def corpus(self, client, jane, bob):
        _, jane_token = jane
        _, bob_token = bob
        _create(client, jane_token, "Jane budget", content="private budget", access="private")
        _create(client, jane_token, "Jane notes", content="team budget", access="role")
        _create(client, bob_token, "Bob budget", content="draft", access="private")
        _create(client, bob_token, "Bob essay", content="budget essay", access="public")
        _create(client, bob_token, "Unrelated", content="nothing", access="public")

    def _titles(self, response):
        return [row["title"] for row in response.json()["documents"]["rows"]]

    def test_member_sees_own_and_shared(self, client, jane, corpus):
        _, token = jane
        response = client.get("/search/documents?search=budget", headers=auth(token))
        assert response.status_code == 200
        assert self._titles(response) == ["Bob essay", "Jane notes", "Jane budget"]

    def test_admin_sees_all_matches(self, client, admin, corpus):
        _, token = admin
        response = client.get("/search/documents?search=BUDGET", headers=auth(token))
        assert self._titles(response) == ["Bob essay", "Bob budget", "Jane notes", "Jane budget"]

    def test_empty_search_returns_all_visible(self, client, bob, corpus):
        _, token = bob
        response = client.get("/search/documents?search=%20%20", headers=auth(token))
        assert response.json()["documents"]["count"] == 4

    def test_missing_search_parameter_matches_all(self, client, bob, corpus):
        _, token = bob
        response = client.get("/search/documents", headers=auth(token))
        assert response.json()["documents"]["count"] == 4

    def test_search_is_paginated(self, client, admin, corpus):
        _, token = admin
        response = client.get("/search/documents?search=budget&limit=2&offset=2", headers=auth(token))
        body = response.json()
        assert self._titles(response) == ["Jane notes", "Jane budget"]
        assert body["metaData"]["totalPages"] == 2
        assert body["metaData"]["currentPage"] == 2

    def test_search_requires_token(self, client):
        assert client.get("/search/documents?search=x").status_code == 401
