from tests.fakes import page_record


def _open(client):
    r = client.post("/viewer/sessions")
    assert r.status_code == 201
    return r.json()["data"]["session_id"]


def test_open_session_starts_at_default_view(client):
    r = client.post("/viewer/sessions")

    body = r.json()
    assert body["status"] == "ok"
    viewport = body["data"]["viewport"]
    assert viewport["center"] == {"lat": 51.505, "lon": -0.09}
    assert viewport["zoom_level"] == 13
    assert viewport["active_layer_id"] == "standard"
    assert body["data"]["browser"] == {
        "item": None, "index": None, "count": 0, "can_navigate": False,
    }


def test_unknown_session_is_404(client):
    r = client.get("/viewer/sessions/does-not-exist")

    assert r.status_code == 404
    assert r.json()["error_code"] == "SESSION_NOT_FOUND"


def test_closed_session_is_gone(client):
    sid = _open(client)

    assert client.delete(f"/viewer/sessions/{sid}").json()["data"]["message"] == "Session closed"
    assert client.get(f"/viewer/sessions/{sid}").status_code == 404
    assert client.delete(f"/viewer/sessions/{sid}").status_code == 404


def test_search_recenters_and_loads_nearby_content(client, fake_wiki):
    fake_wiki.add_page(page_record(1, "Eiffel Tower", lat=48.8584, lon=2.2945))
    fake_wiki.add_page(page_record(2, "Louvre", lat=48.8606, lon=2.3376))
    sid = _open(client)

    r = client.post(f"/viewer/sessions/{sid}/search", json={"query": "Paris"})

    body = r.json()
    assert body["error"] is None
    data = body["data"]
    assert data["dispatched"] is True
    assert data["snapshot"]["search_location"] == {"lat": 48.8566, "lon": 2.3522}
    assert data["match"]["display_name"] == "Paris, France"
    assert data["snapshot"]["viewport"]["center"] == {"lat": 48.8566, "lon": 2.3522}
    assert data["snapshot"]["marker_count"] == 2
    assert data["snapshot"]["browser"]["item"]["title"] == "Eiffel Tower"
    assert fake_wiki.discovery_requests[0].url.params["gscoord"] == "48.8566|2.3522"


def test_short_search_is_not_dispatched(client, fake_geocoder):
    sid = _open(client)

    body = client.post(f"/viewer/sessions/{sid}/search", json={"query": "ab"}).json()

    assert body["data"]["dispatched"] is False
    assert body["error"] is None
    assert fake_geocoder.requests == []


def test_search_without_match_reports_no_results(client, fake_geocoder):
    fake_geocoder.payload = []
    sid = _open(client)

    body = client.post(f"/viewer/sessions/{sid}/search", json={"query": "Atlantis"}).json()

    assert body["error"] == "No results found"
    assert body["data"]["snapshot"]["viewport"]["center"] == {"lat": 51.505, "lon": -0.09}


def test_viewport_and_browser_navigation(client, fake_wiki):
    for pid, title in [(1, "Tower of London"), (2, "The Shard"), (3, "Borough Market")]:
        fake_wiki.add_page(page_record(pid, title))
    sid = _open(client)

    data = client.post(
        f"/viewer/sessions/{sid}/viewport",
        json={"latitude": 51.505, "longitude": -0.09, "zoom": 15},
    ).json()["data"]
    assert data["browser"]["count"] == 3
    assert data["browser"]["index"] == 0
    assert data["viewport"]["zoom_level"] == 15

    indices = [
        client.post(f"/viewer/sessions/{sid}/browser/next").json()["data"]["browser"]["index"]
        for _ in range(3)
    ]
    assert indices == [1, 2, 0]

    data = client.post(f"/viewer/sessions/{sid}/browser/previous").json()["data"]
    assert data["browser"]["index"] == 2
    assert data["browser"]["item"]["title"] == "Borough Market"


def test_viewport_rejects_out_of_range_zoom(client):
    sid = _open(client)

    r = client.post(
        f"/viewer/sessions/{sid}/viewport",
        json={"latitude": 0.0, "longitude": 0.0, "zoom": 25},
    )

    assert r.status_code == 422
    assert r.json()["error_code"] == "VALIDATION_ERROR"


def test_geolocation_then_locate(client):
    sid = _open(client)

    r = client.post(f"/viewer/sessions/{sid}/locate")
    assert r.json()["status"] == "error"
    assert r.json()["error"] == "User location is not available"

    data = client.post(
        f"/viewer/sessions/{sid}/geolocation",
        json={"latitude": 40.4168, "longitude": -3.7038},
    ).json()["data"]
    assert data["user_location"] == {"lat": 40.4168, "lon": -3.7038}

    client.post(
        f"/viewer/sessions/{sid}/viewport",
        json={"latitude": 0.0, "longitude": 0.0, "zoom": 3},
    )
    data = client.post(f"/viewer/sessions/{sid}/locate").json()["data"]
    assert data["viewport"]["center"] == {"lat": 40.4168, "lon": -3.7038}
    assert data["viewport"]["zoom_level"] == 13


def test_denied_geolocation_leaves_default_view(client):
    sid = _open(client)

    data = client.post(
        f"/viewer/sessions/{sid}/geolocation",
        json={"error": "User denied Geolocation"},
    ).json()["data"]

    assert data["user_location"] is None
    assert data["viewport"]["center"] == {"lat": 51.505, "lon": -0.09}


def test_half_a_coordinate_is_rejected(client):
    sid = _open(client)

    r = client.post(f"/viewer/sessions/{sid}/geolocation", json={"latitude": 10.0})

    assert r.status_code == 422


def test_layer_switch_and_map_render(client):
    sid = _open(client)

    data = client.put(f"/viewer/sessions/{sid}/layer", json={"layer": "satellite"}).json()["data"]
    assert data["viewport"]["active_layer_id"] == "satellite"

    r = client.get(f"/viewer/sessions/{sid}/map")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "World_Imagery" in r.text
    assert "tile.openstreetmap.org" not in r.text


def test_unknown_layer_is_rejected(client):
    sid = _open(client)

    r = client.put(f"/viewer/sessions/{sid}/layer", json={"layer": "terrain"})

    assert r.status_code == 422


def test_health_counts_open_sessions(client):
    _open(client)
    _open(client)

    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["active_sessions"] == 2
