import json

import pytest

from app.models import AboutSection, CommissionSection
from tests.conftest import seed

COMMISSIONS = "/api/cms/commission-sections"
ABOUT = "/api/cms/about-sections"


def _create(client, base, section_type, title, content, visible=True):
    resp = client.post(base, json={
        "section_type": section_type,
        "title": title,
        "content_json": json.dumps(content),
        "visible": visible,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_sections_api_requires_session(client):
    assert client.get(COMMISSIONS).status_code == 401
    assert client.get(ABOUT).status_code == 401


def test_create_appends_section(admin_client):
    first = _create(admin_client, COMMISSIONS, "status", "Status", {"status": "open"})
    second = _create(admin_client, COMMISSIONS, "services", "Services", {"items": ["Build", "Lube"]})

    assert first["display_order"] == 0
    assert second["display_order"] == 1
    assert second["content"] == {"items": ["Build", "Lube"]}


def test_create_rejects_unknown_section_type(admin_client):
    resp = admin_client.post(COMMISSIONS, json={"section_type": "hero", "title": "Hero", "content_json": "{}"})
    assert resp.status_code == 400
    assert "Section type must be one of" in resp.json()["detail"]


@pytest.mark.parametrize("raw", ['{"status": "open",', "not json", ""])
def test_update_with_malformed_json_leaves_row_unchanged(admin_client, raw):
    section = _create(admin_client, COMMISSIONS, "status", "Status", {"status": "open", "note": "Two slots"})

    resp = admin_client.put(f"{COMMISSIONS}/{section['id']}", json={"title": "Renamed", "content_json": raw})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid JSON"

    stored = admin_client.get(COMMISSIONS).json()[0]
    assert stored["title"] == "Status"
    assert stored["content"] == {"status": "open", "note": "Two slots"}


def test_update_rejects_json_that_is_not_an_object(admin_client):
    section = _create(admin_client, COMMISSIONS, "services", "Services", {"items": []})
    resp = admin_client.put(f"{COMMISSIONS}/{section['id']}", json={"title": "x", "content_json": "[1, 2]"})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid JSON")


def test_update_rejects_content_not_matching_type(admin_client):
    section = _create(admin_client, COMMISSIONS, "status", "Status", {"status": "open"})

    resp = admin_client.put(
        f"{COMMISSIONS}/{section['id']}",
        json={"title": "Status", "content_json": json.dumps({"status": "maybe"})},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid content"

    resp = admin_client.put(
        f"{COMMISSIONS}/{section['id']}",
        json={"title": "Status", "content_json": json.dumps({"status": "closed", "colour": "red"})},
    )
    assert resp.status_code == 400


def test_update_saves_title_content_and_visibility(admin_client):
    section = _create(admin_client, ABOUT, "hero", "Hero", {"subtitle": "Hi"})

    resp = admin_client.put(
        f"{ABOUT}/{section['id']}",
        json={"title": "About me", "content_json": json.dumps({"subtitle": "Builder"}), "visible": False},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["title"] == "About me"
    assert body["content"] == {"subtitle": "Builder"}
    assert body["visible"] is False


def test_move_and_delete(admin_client):
    ids = seed(
        CommissionSection(section_type="intro", title="a", content={"text": "a"}, display_order=0),
        CommissionSection(section_type="intro", title="b", content={"text": "b"}, display_order=1),
        CommissionSection(section_type="intro", title="c", content={"text": "c"}, display_order=2),
    )

    resp = admin_client.post(f"{COMMISSIONS}/{ids[0]}/move", json={"direction": 1})
    assert resp.status_code == 200
    assert [s["title"] for s in resp.json()] == ["b", "a", "c"]

    resp = admin_client.post(f"{COMMISSIONS}/{ids[2]}/move", json={"direction": 1})
    assert [s["title"] for s in resp.json()] == ["b", "a", "c"]

    assert admin_client.delete(f"{COMMISSIONS}/{ids[1]}").status_code == 200
    assert [s["title"] for s in admin_client.get(COMMISSIONS).json()] == ["a", "c"]


def test_move_unknown_section_is_not_found(admin_client):
    resp = admin_client.post(f"{ABOUT}/99/move", json={"direction": 1})
    assert resp.status_code == 404


def test_section_tables_are_independent(admin_client):
    seed(AboutSection(section_type="hero", title="Hero", content={"subtitle": "x"}, display_order=0))
    assert admin_client.get(COMMISSIONS).json() == []
    assert len(admin_client.get(ABOUT).json()) == 1


def test_update_without_visible_keeps_hidden_section_hidden(admin_client):
    section = _create(admin_client, COMMISSIONS, "faq", "FAQ", {"items": []}, visible=False)

    resp = admin_client.put(
        f"{COMMISSIONS}/{section['id']}",
        json={"title": "FAQ", "content_json": json.dumps({"items": [{"question": "Lead time?", "answer": "Six weeks"}]})},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["visible"] is False
    assert admin_client.get("/commission").json()["sections"] == []
