import pytest

from conftest import build_checklist
from greencert.app import db
from greencert.constants import CertificationTier
from greencert.models import Office


def _create(client, **payload):
    payload.setdefault("office_name", "Harbourside HQ")
    return client.post("/api/offices", json=payload)


def test_create_office_defaults_to_not_certified(client):
    resp = _create(client, department="Facilities", contact_email="Ops@Example.com")
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["completion_percent"] == 0
    assert data["certification_tier"] == CertificationTier.NOT_CERTIFIED.value
    assert data["contact_email"] == "ops@example.com"
    assert data["checklist"]["pantry"] == {}
    assert data["category_progress"]["events"] == {"implemented": 0, "total": 5}


def test_create_office_with_checklist_derives_score_and_tier(client, app):
    resp = _create(client, checklist=build_checklist(13))
    data = resp.get_json()
    assert data["completion_percent"] == 52
    assert data["certification_tier"] == "Bronze"
    assert 'class="tier-badge"' in data["tier_badge"]
    stored = db.session.get(Office, data["id"])
    assert stored.certification_tier == "Bronze"
    assert stored.pantry_checklist["compost_bin"] == "Implemented"


def test_create_requires_office_name(client):
    resp = client.post("/api/offices", json={"department": "Facilities"})
    assert resp.status_code == 400
    assert "office_name" in resp.get_json()["error"]


def test_create_rejects_non_json(client):
    resp = client.post("/api/offices", data="office_name=x")
    assert resp.status_code == 400


def test_create_rejects_unknown_item(client, app):
    resp = _create(client, checklist={"pantry": {"espresso_machine": "Implemented"}})
    assert resp.status_code == 400
    assert "espresso_machine" in resp.get_json()["error"]
    assert db.session.query(Office).count() == 0


def test_update_recomputes_from_merged_checklist(client):
    office_id = _create(client, checklist=build_checklist(10)).get_json()["id"]
    resp = client.put(
        f"/api/offices/{office_id}",
        json={
            "checklist": {
                "premises": {
                    "led_lighting": "Implemented",
                    "smart_thermostats": "Implemented",
                    "bike_parking": "Implemented",
                }
            }
        },
    )
    data = resp.get_json()
    assert resp.status_code == 200
    assert data["completion_percent"] == 52
    assert data["certification_tier"] == "Bronze"
    assert data["category_progress"]["pantry"]["implemented"] == 5


def test_update_replaces_supplied_category(client):
    office_id = _create(client, checklist=build_checklist(25)).get_json()["id"]
    resp = client.put(
        f"/api/offices/{office_id}",
        json={"checklist": {"events": {"waste_sorting": "In Progress"}}},
    )
    data = resp.get_json()
    assert data["completion_percent"] == 80
    assert data["certification_tier"] == "Gold"
    assert data["checklist"]["events"] == {"waste_sorting": "In Progress"}


def test_update_descriptive_fields_only(client):
    office_id = _create(client, checklist=build_checklist(22)).get_json()["id"]
    resp = client.put(
        f"/api/offices/{office_id}",
        json={"department": "Operations", "total_employees": "45", "certificate_date": "2026-01-15"},
    )
    data = resp.get_json()
    assert data["department"] == "Operations"
    assert data["total_employees"] == 45
    assert data["certificate_date"] == "2026-01-15"
    assert data["completion_percent"] == 88
    assert data["certification_tier"] == "Platinum"


def test_invalid_update_leaves_record_untouched(client, app):
    office_id = _create(client, checklist=build_checklist(10)).get_json()["id"]
    resp = client.put(
        f"/api/offices/{office_id}",
        json={"department": "Changed", "checklist": {"pantry": {"compost_bin": "Maybe"}}},
    )
    assert resp.status_code == 400
    stored = db.session.get(Office, office_id)
    assert stored.department is None
    assert stored.completion_percent == 40


@pytest.mark.parametrize(
    "payload",
    [{"total_employees": "many"}, {"total_employees": -3}, {"certificate_date": "soon"}],
)
def test_update_rejects_bad_descriptive_values(client, payload):
    office_id = _create(client).get_json()["id"]
    assert client.put(f"/api/offices/{office_id}", json=payload).status_code == 400


def test_list_get_and_delete(client):
    first = _create(client, office_name="North Annex").get_json()["id"]
    second = _create(client, office_name="South Wing").get_json()["id"]
    names = [o["office_name"] for o in client.get("/api/offices").get_json()]
    assert names == ["North Annex", "South Wing"]
    assert client.get(f"/api/offices/{second}").get_json()["office_name"] == "South Wing"

    resp = client.delete(f"/api/offices/{first}")
    assert resp.get_json() == {"message": "Deleted"}
    assert client.get(f"/api/offices/{first}").status_code == 404
    assert client.get(f"/api/offices/{first}/certificate/eligibility").status_code == 404


def test_missing_office_returns_404(client):
    assert client.get("/api/offices/999").status_code == 404
    assert client.put("/api/offices/999", json={"department": "x"}).status_code == 404
    assert client.delete("/api/offices/999").status_code == 404


def test_tiers_endpoint_reports_active_table(client):
    data = client.get("/api/tiers").get_json()
    assert data["eligibility_min_percent"] == 40
    assert data["thresholds"][0] == {"tier": "Bronze", "min_percent": 40}
    assert [t["tier"] for t in data["thresholds"]] == ["Bronze", "Silver", "Gold", "Platinum"]


def test_six_tier_deployment_classifies_certified(six_tier_app):
    client = six_tier_app.test_client()
    data = _create(client, checklist=build_checklist(13)).get_json()
    assert data["completion_percent"] == 52
    assert data["certification_tier"] == "Certified"


def test_checklist_taxonomy_endpoint(client):
    data = client.get("/api/checklist").get_json()
    assert set(data["categories"]) == {"pantry", "restrooms", "meeting_rooms", "events", "premises"}
    assert "Implemented" in data["statuses"]
