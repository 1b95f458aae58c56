from datetime import date
from uuid import UUID

from fastapi import status

from crm.models.contact import Contact
from crm.models.user import User
from crm.utils.security import get_password_hash, issue_token
from tests.conftest import auth_headers, backdate, parse_timestamp, register_user


def _create_contact(client, headers, **overrides) -> dict:
    payload = {"name": "John Smith", "email": "john@acmecorp.com", "company_name": "Acme Corp"}
    payload.update(overrides)
    response = client.post("/contacts", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.json()
    return response.json()


def test_create_contact_applies_defaults(client, tenant_a) -> None:
    contact = _create_contact(client, tenant_a)
    me = client.get("/auth/me", headers=tenant_a).json()["user"]

    assert contact["company_id"] == me["company_id"]
    assert contact["value"] == 0
    assert contact["status"] == "prospect"
    assert contact["last_contact"] == date.today().isoformat()
    assert contact["tags"] == []


def test_create_contact_requires_name(client, tenant_a) -> None:
    missing = client.post("/contacts", json={"email": "x@example.com"}, headers=tenant_a)
    blank = client.post("/contacts", json={"name": "   "}, headers=tenant_a)

    assert missing.status_code == status.HTTP_400_BAD_REQUEST
    assert missing.json() == {"detail": "Name is required"}
    assert blank.status_code == status.HTTP_400_BAD_REQUEST


def test_create_contact_deduplicates_tags(client, tenant_a) -> None:
    contact = _create_contact(client, tenant_a, tags=["vip", " vip", "", "enterprise"])
    assert contact["tags"] == ["vip", "enterprise"]


def test_list_contacts_filters_by_search_and_status(client, tenant_a) -> None:
    _create_contact(client, tenant_a, name="John Smith", status="active")
    _create_contact(client, tenant_a, name="Sarah Johnson", email="sarah@techstart.com", company_name="TechStart")
    _create_contact(client, tenant_a, name="Mike Wilson", email="mike@global.com", company_name="Global")

    by_company = client.get("/contacts", params={"search": "TECHSTART"}, headers=tenant_a).json()
    assert [item["name"] for item in by_company] == ["Sarah Johnson"]

    by_name = client.get("/contacts", params={"search": "john"}, headers=tenant_a).json()
    assert {item["name"] for item in by_name} == {"John Smith", "Sarah Johnson"}

    active = client.get("/contacts", params={"status": "active"}, headers=tenant_a).json()
    assert [item["name"] for item in active] == ["John Smith"]


def test_list_contacts_limit_and_offset(client, tenant_a) -> None:
    for index in range(5):
        _create_contact(client, tenant_a, name=f"Contact {index}")

    assert len(client.get("/contacts", headers=tenant_a).json()) == 5
    assert len(client.get("/contacts", params={"limit": 2}, headers=tenant_a).json()) == 2
    assert len(client.get("/contacts", params={"limit": 2, "offset": 4}, headers=tenant_a).json()) == 1
    assert client.get("/contacts", params={"limit": 0}, headers=tenant_a).status_code == status.HTTP_400_BAD_REQUEST


def test_list_contacts_rejects_out_of_range_paging(client, tenant_a) -> None:
    too_big = str(10**20)
    for params in ({"limit": too_big}, {"offset": too_big}):
        response = client.get("/contacts", params=params, headers=tenant_a)
        assert response.status_code == status.HTTP_400_BAD_REQUEST, params


def test_search_folds_accented_characters(client, tenant_a) -> None:
    _create_contact(client, tenant_a, name="Émile Zola", email="emile@example.com", company_name="Rougon")
    _create_contact(client, tenant_a, name="Victor Hugo", email="victor@example.com", company_name="Misérables")

    for term in ("ÉMILE", "émile"):
        found = client.get("/contacts", params={"search": term}, headers=tenant_a).json()
        assert [item["name"] for item in found] == ["Émile Zola"], term

    by_company = client.get("/contacts", params={"search": "MISÉRABLES"}, headers=tenant_a).json()
    assert [item["name"] for item in by_company] == ["Victor Hugo"]


def test_get_contact(client, tenant_a) -> None:
    contact = _create_contact(client, tenant_a)
    response = client.get(f"/contacts/{contact['id']}", headers=tenant_a)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "John Smith"


def test_update_contact_replaces_every_field(client, tenant_a) -> None:
    contact = _create_contact(
        client,
        tenant_a,
        phone="+1-555-123-4567",
        position="CEO",
        value=50000,
        notes="Key decision maker",
        tags=["vip"],
    )

    response = client.put(f"/contacts/{contact['id']}", json={"name": "John S."}, headers=tenant_a)
    assert response.status_code == status.HTTP_200_OK, response.json()
    updated = response.json()

    assert updated["name"] == "John S."
    assert updated["email"] is None
    assert updated["phone"] is None
    assert updated["position"] is None
    assert updated["company_name"] is None
    assert updated["value"] is None
    assert updated["notes"] is None
    assert updated["status"] is None
    assert updated["tags"] == []
    assert updated["last_contact"] == contact["last_contact"]


def test_update_contact_refreshes_updated_at(client, tenant_a, db_session) -> None:
    created = _create_contact(client, tenant_a)
    backdate(db_session, Contact, created["id"])

    response = client.put(f"/contacts/{created['id']}", json={"name": "Renamed"}, headers=tenant_a)
    assert response.status_code == status.HTTP_200_OK, response.json()
    updated = response.json()

    assert parse_timestamp(updated["updated_at"]) > parse_timestamp(updated["created_at"])
    assert parse_timestamp(updated["updated_at"]) > parse_timestamp(created["updated_at"])


def test_update_contact_requires_name(client, tenant_a) -> None:
    contact = _create_contact(client, tenant_a)
    response = client.put(f"/contacts/{contact['id']}", json={"email": "new@example.com"}, headers=tenant_a)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_contact(client, tenant_a) -> None:
    contact = _create_contact(client, tenant_a)

    response = client.delete(f"/contacts/{contact['id']}", headers=tenant_a)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Contact deleted successfully"}

    assert client.get(f"/contacts/{contact['id']}", headers=tenant_a).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(f"/contacts/{contact['id']}", headers=tenant_a).status_code == status.HTTP_404_NOT_FOUND


def test_contacts_are_isolated_between_companies(client, tenant_a, tenant_b) -> None:
    contact = _create_contact(client, tenant_a)
    url = f"/contacts/{contact['id']}"

    assert client.get("/contacts", headers=tenant_b).json() == []
    assert client.get(url, headers=tenant_b).status_code == status.HTTP_404_NOT_FOUND
    assert client.put(url, json={"name": "Hijack"}, headers=tenant_b).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(url, headers=tenant_b).status_code == status.HTTP_404_NOT_FOUND

    untouched = client.get(url, headers=tenant_a).json()
    assert untouched["name"] == "John Smith"


def test_users_of_same_company_share_contacts(client, db_session) -> None:
    token, owner = register_user(client)
    company_id = db_session.get(User, UUID(owner["id"])).company_id
    colleague = User(
        company_id=company_id,
        email="colleague@example.com",
        password_hash=get_password_hash("Senha@123"),
        name="Colleague",
    )
    db_session.add(colleague)
    db_session.commit()

    contact = _create_contact(client, auth_headers(token))
    colleague_headers = auth_headers(issue_token(str(colleague.id)))
    response = client.get(f"/contacts/{contact['id']}", headers=colleague_headers)
    assert response.status_code == status.HTTP_200_OK
