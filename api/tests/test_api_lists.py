import pytest

from conftest import register_and_login


@pytest.fixture
async def owner_headers(client):
    return await register_and_login(client, "owner@example.com", nickname="Owner")


@pytest.fixture
async def stranger_headers(client):
    return await register_and_login(client, "stranger@example.com", nickname="Stranger")


async def create(client, headers, name="Trip", **fields):
    response = await client.post("/lists", json={"name": name, **fields}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_requires_authentication(client):
    response = await client.post("/lists", json={"name": "Trip"})
    assert response.status_code == 401
    assert response.json()["code"] == "unauthenticated"


async def test_create_and_get(client, owner_headers):
    created = await create(client, owner_headers, description="Summer", is_visible=True)
    assert created["creator_nickname"] == "Owner"
    assert created["destinations"] == []
    assert created["average_rating"] == 0

    response = await client.get("/lists/Trip")
    assert response.status_code == 200
    assert response.json()["description"] == "Summer"


async def test_create_duplicate_and_invalid_names(client, owner_headers):
    await create(client, owner_headers)
    response = await client.post("/lists", json={"name": "Trip"}, headers=owner_headers)
    assert response.status_code == 409

    response = await client.post("/lists", json={"name": "x" * 51}, headers=owner_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_name"

    response = await client.post("/lists", json={}, headers=owner_headers)
    assert response.status_code == 400


async def test_private_list_visibility(client, owner_headers, stranger_headers):
    await create(client, owner_headers, name="Secret")
    assert (await client.get("/lists/Secret", headers=stranger_headers)).status_code == 403
    assert (await client.get("/lists/Secret", headers=owner_headers)).status_code == 200

    names = [l["name"] for l in (await client.get("/lists", headers=stranger_headers)).json()]
    assert "Secret" not in names
    names = [l["name"] for l in (await client.get("/lists", headers=owner_headers)).json()]
    assert names == ["Secret"]

    response = await client.put("/lists/Secret/visibility", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["is_visible"] is True
    assert (await client.get("/lists/Secret")).status_code == 200


async def test_update_and_rename(client, owner_headers, stranger_headers):
    await create(client, owner_headers, name="Old", is_visible=True)

    response = await client.put("/lists/Old", json={"description": "hi"}, headers=stranger_headers)
    assert response.status_code == 403

    response = await client.put(
        "/lists/Old", json={"name": "New", "description": "hi"}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "New"
    assert response.json()["description"] == "hi"

    assert (await client.get("/lists/Old")).status_code == 404
    assert (await client.get("/lists/New")).status_code == 200


async def test_rename_onto_existing_list_conflicts(client, owner_headers):
    await create(client, owner_headers, name="Old", is_visible=True)
    await create(client, owner_headers, name="New")
    response = await client.put("/lists/Old", json={"name": "New"}, headers=owner_headers)
    assert response.status_code == 409
    assert (await client.get("/lists/Old")).status_code == 200


async def test_delete(client, owner_headers, stranger_headers):
    await create(client, owner_headers)
    assert (await client.delete("/lists/Trip", headers=stranger_headers)).status_code == 403
    assert (await client.delete("/lists/Trip", headers=owner_headers)).status_code == 200
    assert (await client.delete("/lists/Trip", headers=owner_headers)).status_code == 404


async def test_membership(client, owner_headers, stranger_headers):
    await create(client, owner_headers, is_visible=True)

    response = await client.post(
        "/lists/Trip/destinations", json={"destination_id": 4}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json() == {"name": "Trip", "destinations": [4]}

    response = await client.post(
        "/lists/Trip/destinations", json={"destination_id": "4"}, headers=owner_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "duplicate"

    response = await client.post(
        "/lists/Trip/destinations", json={"destination_id": 99}, headers=owner_headers
    )
    assert response.status_code == 404

    response = await client.post("/lists/Trip/destinations", json={}, headers=owner_headers)
    assert response.status_code == 400

    response = await client.put(
        "/lists/Trip/destinations", json={"destination_ids": [1, 4, 1]}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["destinations"] == [4, 1]

    response = await client.delete("/lists/Trip/destinations/4", headers=stranger_headers)
    assert response.status_code == 403
    response = await client.delete("/lists/Trip/destinations/4", headers=owner_headers)
    assert response.json()["destinations"] == [1]

    response = await client.get("/lists/Trip/details")
    assert [d["name"] for d in response.json()] == ["Rome"]


async def test_reviews(client, owner_headers, stranger_headers):
    await create(client, owner_headers, is_visible=True)

    for rating, comment in ((5, "great"), (3, "fine"), (4, "good")):
        response = await client.post(
            "/lists/Trip/reviews",
            json={"rating": rating, "comment": comment},
            headers=stranger_headers,
        )
        assert response.status_code == 201, response.text
    assert response.json()["average_rating"] == 4.0
    assert response.json()["review"]["user_name"] == "Stranger"

    response = await client.post(
        "/lists/Trip/reviews", json={"rating": 7, "comment": "wow"}, headers=stranger_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_rating"

    response = await client.post(
        "/lists/Trip/reviews", json={"rating": 4, "comment": "  "}, headers=stranger_headers
    )
    assert response.json()["code"] == "invalid_comment"

    response = await client.get("/lists/Trip/reviews")
    assert [r["comment"] for r in response.json()] == ["great", "fine", "good"]

    response = await client.post("/lists/Nope/reviews", json={"rating": 4, "comment": "x"}, headers=stranger_headers)
    assert response.status_code == 404


async def test_list_limit_must_be_positive(client):
    response = await client.get("/lists", params={"limit": 0})
    assert response.status_code == 400
    assert "errors" in response.json()["context"]


async def test_private_list_members_and_reviews_are_hidden(client, owner_headers, stranger_headers):
    await create(client, owner_headers, name="Secret")
    await client.post("/lists/Secret/destinations", json={"destination_id": 1}, headers=owner_headers)
    await client.post(
        "/lists/Secret/reviews", json={"rating": 4, "comment": "quiet"}, headers=stranger_headers
    )

    for path in ("/lists/Secret", "/lists/Secret/details", "/lists/Secret/reviews"):
        assert (await client.get(path)).status_code == 403, path
        assert (await client.get(path, headers=stranger_headers)).status_code == 403, path
        assert (await client.get(path, headers=owner_headers)).status_code == 200, path

    details = (await client.get("/lists/Secret/details", headers=owner_headers)).json()
    assert [d["name"] for d in details] == ["Rome"]
