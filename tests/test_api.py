# =============================================================================
# tests/test_api.py - REST Endpoint Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient against a fresh SQLite file:
# - Status codes and bodies for every endpoint
# - Error body shape {"error": ..., "code": ...}
# - The Ann Lee walkthrough (create, duplicate, bad phone, delete)
#
# Run with: pytest tests/test_api.py -v
# =============================================================================

import pytest

from tests.conftest import make_contact

CONTACTS = "/api/contacts"


# =============================================================================
# Walkthrough
# =============================================================================

def test_ann_lee_walkthrough(client, ann):
    resp = client.post(CONTACTS, json=ann)
    assert resp.status_code == 201
    assert resp.json()["id"] == 1

    resp = client.post(CONTACTS, json=ann)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Email already exists"

    resp = client.put(f"{CONTACTS}/1", json=dict(ann, phone="not-a-phone"))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid phone number format"

    resp = client.delete(f"{CONTACTS}/1")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Contact deleted successfully"}

    resp = client.get(f"{CONTACTS}/1")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Contact not found"


# =============================================================================
# List / Get
# =============================================================================

class TestRead:
    """GET endpoints."""

    def test_list_starts_empty(self, client):
        resp = client.get(CONTACTS)

        assert resp.status_code == 200
        assert resp.json() == []

    def test_list_is_sorted(self, client):
        for first, last in [("Zed", "A"), ("Amy", "Z"), ("Amy", "B")]:
            assert client.post(CONTACTS, json=make_contact(first, last)).status_code == 201

        names = [(c["firstName"], c["lastName"]) for c in client.get(CONTACTS).json()]

        assert names == [("Amy", "B"), ("Amy", "Z"), ("Zed", "A")]

    def test_get_returns_camel_case_record(self, client, ann):
        created = client.post(CONTACTS, json=ann).json()

        resp = client.get(f"{CONTACTS}/{created['id']}")

        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"id", "firstName", "lastName", "address", "email", "phone", "createdAt"}
        assert body["createdAt"].endswith("Z")
        assert body == created
        assert {k: body[k] for k in ann} == ann

    def test_get_non_integer_id_is_not_found(self, client):
        resp = client.get(f"{CONTACTS}/abc")

        assert resp.status_code == 404
        assert resp.json()["error"] == "Contact not found"

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    def test_id_too_large_for_storage_is_not_found(self, client, ann, method):
        client.post(CONTACTS, json=ann)
        body = ann if method == "PUT" else None

        resp = client.request(method, f"{CONTACTS}/99999999999999999999", json=body)

        assert resp.status_code == 404
        assert resp.json() == {"error": "Contact not found", "code": "CONTACT_NOT_FOUND"}


# =============================================================================
# Create
# =============================================================================

class TestCreate:
    """POST /contacts."""

    def test_missing_field(self, client, ann):
        del ann["address"]

        resp = client.post(CONTACTS, json=ann)

        assert resp.status_code == 400
        assert resp.json() == {
            "error": "address is required",
            "code": "MISSING_FIELD",
            "field": "address",
        }

    def test_blank_field(self, client, ann):
        resp = client.post(CONTACTS, json=dict(ann, firstName="   "))

        assert resp.status_code == 400
        assert resp.json()["field"] == "firstName"

    def test_invalid_email(self, client, ann):
        resp = client.post(CONTACTS, json=dict(ann, email="ann.example.com"))

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid email format"
        assert resp.json()["code"] == "INVALID_EMAIL"

    def test_invalid_phone(self, client, ann):
        resp = client.post(CONTACTS, json=dict(ann, phone="012345"))

        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_PHONE"

    def test_duplicate_does_not_change_count(self, client, ann, bob):
        client.post(CONTACTS, json=ann)

        resp = client.post(CONTACTS, json=dict(bob, email=ann["email"]))

        assert resp.status_code == 400
        assert resp.json()["code"] == "DUPLICATE_EMAIL"
        assert len(client.get(CONTACTS).json()) == 1

    def test_non_string_value_is_bad_request(self, client, ann):
        resp = client.post(CONTACTS, json=dict(ann, phone=12025550123))

        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_malformed_json_is_bad_request(self, client):
        resp = client.post(
            CONTACTS,
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_REQUEST"

    def test_client_supplied_id_is_ignored(self, client, ann):
        resp = client.post(CONTACTS, json=dict(ann, id=500))

        assert resp.status_code == 201
        assert resp.json()["id"] == 1


# =============================================================================
# Update
# =============================================================================

class TestUpdate:
    """PUT /contacts/{id}."""

    def test_update_overwrites_fields(self, client, ann):
        created = client.post(CONTACTS, json=ann).json()
        changes = dict(ann, lastName="Park", phone="(202) 555-0199")

        resp = client.put(f"{CONTACTS}/{created['id']}", json=changes)

        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == created["id"]
        assert body["lastName"] == "Park"
        assert body["phone"] == "(202) 555-0199"
        assert body["createdAt"] == created["createdAt"]
        assert client.get(f"{CONTACTS}/{created['id']}").json() == body

    def test_update_keeping_own_email(self, client, ann):
        created = client.post(CONTACTS, json=ann).json()

        resp = client.put(f"{CONTACTS}/{created['id']}", json=ann)

        assert resp.status_code == 200

    def test_update_to_taken_email(self, client, ann, bob):
        client.post(CONTACTS, json=ann)
        second = client.post(CONTACTS, json=bob).json()

        resp = client.put(f"{CONTACTS}/{second['id']}", json=dict(bob, email=ann["email"]))

        assert resp.status_code == 400
        assert resp.json()["error"] == "Email already exists"

    def test_update_missing(self, client, ann):
        resp = client.put(f"{CONTACTS}/99", json=ann)

        assert resp.status_code == 404
        assert resp.json()["code"] == "CONTACT_NOT_FOUND"


# =============================================================================
# Delete
# =============================================================================

class TestDelete:
    """DELETE /contacts/{id}."""

    def test_delete_missing(self, client):
        resp = client.delete(f"{CONTACTS}/99")

        assert resp.status_code == 404
        assert resp.json()["error"] == "Contact not found"

    def test_delete_removes_from_list(self, client, ann, bob):
        first = client.post(CONTACTS, json=ann).json()
        client.post(CONTACTS, json=bob)

        client.delete(f"{CONTACTS}/{first['id']}")

        emails = [c["email"] for c in client.get(CONTACTS).json()]
        assert emails == [bob["email"]]


# =============================================================================
# Health / Root
# =============================================================================

class TestHealth:
    """Health endpoints."""

    def test_health(self, client):
        resp = client.get("/api/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_ready_checks_database(self, client):
        resp = client.get("/api/health/ready")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ready"
        assert resp.json()["checks"]["database"] == "healthy"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_root(self, client):
        body = client.get("/").json()

        assert body["contacts"] == "/api/contacts"
