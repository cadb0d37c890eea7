from app.main import app


async def test_search_by_country(client):
    response = await client.get("/destinations/search", params={"country": "Italy"})
    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["Rome", "Florence", "Venice"]


async def test_search_with_typo_and_limit(client):
    response = await client.get("/destinations/search", params={"name": "Pariz", "n": "1"})
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["id"] == 4
    assert body[0]["region"] == "Île-de-France"


async def test_search_without_criteria_is_rejected(client):
    response = await client.get("/destinations/search")
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_request"


async def test_search_with_bad_limit_is_rejected(client):
    for n in ("0", "-2", "many"):
        response = await client.get("/destinations/search", params={"country": "Italy", "n": n})
        assert response.status_code == 400, n


async def test_search_without_results(client):
    response = await client.get("/destinations/search", params={"name": "Atlantis"})
    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "not_found"
    assert body["context"]["name"] == "Atlantis"


async def test_search_before_catalog_is_loaded(client):
    app.state.catalog = None
    response = await client.get("/destinations/search", params={"name": "Paris"})
    assert response.status_code == 503
    assert response.json()["code"] == "catalog_not_loaded"


async def test_get_destination(client):
    response = await client.get("/destinations/1")
    assert response.status_code == 200
    assert response.json()["name"] == "Rome"


async def test_get_destination_errors(client):
    assert (await client.get("/destinations/abc")).status_code == 400
    assert (await client.get("/destinations/0")).status_code == 400
    assert (await client.get("/destinations/99")).status_code == 400
    assert (await client.get("/destinations/15")).status_code == 400
    assert (await client.get("/destinations/14")).status_code == 200


async def test_coordinates(client):
    response = await client.get("/destinations/4/coordinates")
    assert response.status_code == 200
    assert response.json() == {"latitude": 48.856613, "longitude": 2.352222}

    response = await client.get("/destinations/14/coordinates")
    assert response.status_code == 404

    response = await client.get("/destinations/15/coordinates")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid destination ID"


async def test_countries(client):
    response = await client.get("/destinations/countries")
    assert response.status_code == 200
    countries = response.json()
    assert countries[:3] == ["Italy", "France", "Spain"]
    assert len(countries) == len(set(countries))
