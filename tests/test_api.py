"""
JSON API tests for /api/activities, /api/contacts and /api/deals.
"""


def test_root_and_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}

    data = client.get("/").json()
    assert data["status"] == "running"
    assert data["activities"] == "/activities"


def test_list_activities_newest_first(client, sample_data) -> None:
    response = client.get("/api/activities/")

    assert response.status_code == 200
    data = response.json()
    assert [a["type"] for a in data] == ["email", "call", "note"]

    call = data[1]
    assert call["contact"] == {"id": sample_data.maya.id, "name": "Maya Patel"}
    assert call["deal"] == {"id": sample_data.renewal.id, "name": "Northwind renewal"}
    assert data[0]["deal"] is None


def test_list_activities_with_filters(client, sample_data) -> None:
    response = client.get("/api/activities/", params={"search": "PRICING", "type": "call"})

    assert response.status_code == 200
    assert [a["description"] for a in response.json()] == ["Discussed renewal pricing"]


def test_create_activity(client, sample_data) -> None:
    response = client.post("/api/activities/", json={
        "type": "meeting",
        "date": "2024-03-09T10:00:00Z",
        "description": "  Onsite workshop ",
        "contact_id": sample_data.jordan.id,
    })

    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "meeting"
    assert data["description"] == "Onsite workshop"
    assert data["contact"]["name"] == "Jordan Lee"
    assert data["deal_id"] is None


def test_create_activity_validation(client, sample_data) -> None:
    response = client.post("/api/activities/", json={
        "type": "fax",
        "date": "2024-03-09T10:00:00Z",
        "description": "   ",
        "contact_id": sample_data.jordan.id,
    })

    assert response.status_code == 422


def test_create_activity_unknown_contact(client, sample_data) -> None:
    response = client.post("/api/activities/", json={
        "type": "call",
        "date": "2024-03-09T10:00:00Z",
        "description": "Call",
        "contact_id": 999,
    })

    assert response.status_code == 422
    assert response.json()["detail"] == "Contact 999 does not exist"


def test_update_and_delete_activity(client, sample_data) -> None:
    call_id = sample_data.call.id

    response = client.put(f"/api/activities/{call_id}", json={"deal_id": None, "type": "meeting"})
    assert response.status_code == 200
    assert response.json()["deal_id"] is None
    assert response.json()["type"] == "meeting"

    assert client.delete(f"/api/activities/{call_id}").status_code == 204
    assert client.get(f"/api/activities/{call_id}").status_code == 404


def test_missing_activity_is_404(client) -> None:
    response = client.get("/api/activities/123")

    assert response.status_code == 404
    assert response.json()["detail"] == "Activity not found"


def test_contacts_crud(client) -> None:
    created = client.post("/api/contacts/", json={"name": "Sam Okafor", "company": "Fabrikam"})
    assert created.status_code == 201
    contact_id = created.json()["id"]

    assert [c["name"] for c in client.get("/api/contacts/").json()] == ["Sam Okafor"]

    updated = client.put(f"/api/contacts/{contact_id}", json={"phone": "+1 555 0134"})
    assert updated.json()["phone"] == "+1 555 0134"
    assert updated.json()["company"] == "Fabrikam"

    assert client.delete(f"/api/contacts/{contact_id}").status_code == 204
    assert client.get(f"/api/contacts/{contact_id}").status_code == 404


def test_deals_crud(client) -> None:
    created = client.post("/api/deals/", json={"name": "Contoso pilot", "value": "12000"})
    assert created.status_code == 201
    deal = created.json()
    assert deal["stage"] == "lead"

    updated = client.put(f"/api/deals/{deal['id']}", json={"stage": "proposal"})
    assert updated.json()["stage"] == "proposal"

    assert client.delete(f"/api/deals/{deal['id']}").status_code == 204
    assert client.get("/api/deals/").json() == []


def test_deleting_deal_keeps_activity(client, sample_data) -> None:
    call_id = sample_data.call.id

    assert client.delete(f"/api/deals/{sample_data.renewal.id}").status_code == 204

    call = client.get(f"/api/activities/{call_id}").json()
    assert call["deal_id"] is None
    assert call["deal"] is None


def test_update_activity_rejects_null_required_fields(client, sample_data) -> None:
    call_id = sample_data.call.id

    for field in ("type", "date", "description"):
        response = client.put(f"/api/activities/{call_id}", json={field: None})
        assert response.status_code == 422, field

    call = client.get(f"/api/activities/{call_id}").json()
    assert call["type"] == "call"
    assert call["description"] == "Discussed renewal pricing"


def test_update_contact_rejects_null_name(client, sample_data) -> None:
    response = client.put(f"/api/contacts/{sample_data.jordan.id}", json={"name": None})

    assert response.status_code == 422
    assert client.get(f"/api/contacts/{sample_data.jordan.id}").json()["name"] == "Jordan Lee"


def test_update_deal_rejects_null_name_and_stage(client, sample_data) -> None:
    deal_id = sample_data.renewal.id

    assert client.put(f"/api/deals/{deal_id}", json={"name": None}).status_code == 422
    assert client.put(f"/api/deals/{deal_id}", json={"stage": None}).status_code == 422

    # value is nullable
    assert client.put(f"/api/deals/{deal_id}", json={"value": None}).status_code == 200
