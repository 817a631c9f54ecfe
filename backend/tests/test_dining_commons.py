from fastapi.testclient import TestClient

from courseapp.main import app
from courseapp.repositories import UCSBDiningCommonsRepository

client = TestClient(app)

BASE = "/api/ucsbdiningcommons"

DLG = {
    "code": "de-la-guerra",
    "name": "De La Guerra",
    "hasSackMeal": False,
    "hasTakeOutMeal": False,
    "hasDiningCam": True,
    "latitude": 34.409953,
    "longitude": -119.85277,
}


def test_full_lifecycle(session, admin_headers, user_headers):
    r = client.post(f"{BASE}/post", params=DLG, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == DLG

    r = client.get(BASE, params={"code": "de-la-guerra"}, headers=user_headers)
    assert r.status_code == 200
    assert r.json() == DLG

    edited = {**DLG, "name": "DLG", "hasTakeOutMeal": True}
    r = client.put(BASE, params={"code": "de-la-guerra"}, json=edited, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == edited
    assert UCSBDiningCommonsRepository(session).find_by_id("de-la-guerra").has_take_out_meal is True

    r = client.get(f"{BASE}/all", headers=user_headers)
    assert r.json() == [edited]

    r = client.delete(BASE, params={"code": "de-la-guerra"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "UCSBDiningCommons with id de-la-guerra deleted"}
    assert UCSBDiningCommonsRepository(session).find_all() == []


def test_unknown_code_is_404_for_every_verb(admin_headers):
    expected = {"type": "EntityNotFoundException", "message": "UCSBDiningCommons with id ortega not found"}
    assert client.get(BASE, params={"code": "ortega"}, headers=admin_headers).json() == expected
    r = client.put(BASE, params={"code": "ortega"}, json=DLG, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == expected
    r = client.delete(BASE, params={"code": "ortega"}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == expected


def test_regular_users_cannot_write(user_headers):
    assert client.post(f"{BASE}/post", params=DLG, headers=user_headers).status_code == 403
    assert client.put(BASE, params={"code": "x"}, json=DLG, headers=user_headers).status_code == 403
    assert client.delete(BASE, params={"code": "x"}, headers=user_headers).status_code == 403


def test_logged_out_users_are_forbidden():
    assert client.get(f"{BASE}/all").status_code == 403
    assert client.get(BASE, params={"code": "x"}).status_code == 403
    assert client.post(f"{BASE}/post").status_code == 403
