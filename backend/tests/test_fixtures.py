import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from courseapp import services
from courseapp.main import app
from courseapp.models import User
from courseapp.repositories import UCSBDateRepository, UCSBOrganizationRepository

client = TestClient(app)

SAMPLE = Path(__file__).resolve().parents[1] / "fixtures" / "sample.json"


def test_load_sample_fixtures(session, user_headers):
    counts = services.FixtureService(session).load(json.loads(SAMPLE.read_text(encoding="utf-8")))
    assert counts == {
        "ucsbdates": 2,
        "menuitemreview": 2,
        "recommendationrequest": 1,
        "ucsborganization": 2,
        "ucsbdiningcommons": 1,
    }
    r = client.get("/api/menuitemreview/all", headers=user_headers)
    assert [x["comments"] for x in r.json()] == ["Dope", "Dank"]


def test_natural_keys_upsert_on_reload(session):
    data = {"ucsborganization": [{"orgCode": "ZPR", "orgTranslationShort": "ZPR", "orgTranslation": "old", "inactive": False}]}
    services.FixtureService(session).load(data)
    data["ucsborganization"][0]["orgTranslation"] = "new"
    services.FixtureService(session).load(data)
    [only] = UCSBOrganizationRepository(session).find_all()
    assert only.org_translation == "new"


def test_unknown_collection_is_rejected(session):
    with pytest.raises(ValueError, match="unknown fixture collections: bogus"):
        services.FixtureService(session).load({"bogus": []})


def test_invalid_item_saves_nothing(session):
    data = {
        "ucsbdates": [
            {"quarterYYYYQ": "20221", "name": "ok", "localDateTime": "2022-01-03T12:00:00"},
            {"quarterYYYYQ": "not-a-quarter", "name": "bad", "localDateTime": "2022-01-03T12:00:00"},
        ]
    }
    with pytest.raises(ValueError):
        services.FixtureService(session).load(data)
    assert UCSBDateRepository(session).find_all() == []


def test_natural_key_items_need_their_key(session):
    data = {"ucsbdiningcommons": [{"name": "Ortega", "hasSackMeal": True, "hasTakeOutMeal": True,
                                   "hasDiningCam": False, "latitude": 34.41, "longitude": -119.84}]}
    with pytest.raises(ValueError, match="missing its key"):
        services.FixtureService(session).load(data)


def _seed_script():
    import importlib.util
    path = Path(__file__).resolve().parents[1] / "scripts" / "seed_data.py"
    spec = importlib.util.spec_from_file_location("seed_data", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_seed_script_loads_file_and_promotes_admin(session, regular_user, capsys):
    user_id = regular_user.id
    assert _seed_script().main(fixtures=SAMPLE, admins=["student@ucsb.edu"]) == 0
    out = capsys.readouterr().out
    assert "Loaded 2 rows into ucsborganization" in out
    assert "Granted ADMIN to student@ucsb.edu" in out
    session.expire_all()
    assert len(UCSBOrganizationRepository(session).find_all()) == 2
    assert services.Role.ADMIN in services.roles_for(session.get(User, user_id))


def test_seed_script_reports_missing_file(tmp_path, capsys):
    assert _seed_script().main(fixtures=tmp_path / "missing.json") == 1
    assert "Fixtures file not found" in capsys.readouterr().out


def test_database_error_mid_load_saves_nothing(session, monkeypatch):
    data = {"ucsborganization": [
        {"orgCode": "ZPR", "orgTranslationShort": "ZPR", "orgTranslation": "ZETA PHI RHO", "inactive": False},
        {"orgCode": "SKY", "orgTranslationShort": "SKY", "orgTranslation": "SKYDIVING CLUB", "inactive": False},
    ]}
    real_merge = session.merge
    calls = []

    def merge_then_fail(entity, **kw):
        calls.append(entity)
        if len(calls) == 2:
            raise OperationalError("INSERT", {}, Exception("disk full"))
        return real_merge(entity, **kw)

    monkeypatch.setattr(session, "merge", merge_then_fail)
    with pytest.raises(OperationalError):
        services.FixtureService(session).load(data)
    monkeypatch.undo()
    assert UCSBOrganizationRepository(session).find_all() == []
