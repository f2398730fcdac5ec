import json

from app.models import PastWork
from tests.conftest import image_file, record_row_deletes, seed

BASE = "/api/cms/past-works"


def _create(client, title="Tofu65 Build", files=None, **fields):
    data = {"title": title, **fields}
    resp = client.post(BASE, data=data, files=files or [])
    assert resp.status_code == 201, resp.text
    return resp.json()


def _with_images(client, title="Tofu65 Build", gallery=2):
    files = [("cover", image_file("cover.png"))]
    files += [("images", image_file(f"shot{i}.png")) for i in range(gallery)]
    return _create(client, title=title, files=files)


def test_create_requires_title(admin_client, storage):
    resp = admin_client.post(BASE, data={"title": "   "}, files=[("cover", image_file())])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Title is required"
    assert storage.uploads == []


def test_create_derives_slug_from_title(admin_client):
    work = _create(admin_client, title="Tofu65 -- Lavender Build!")
    assert work["slug"] == "tofu65-lavender-build"
    assert work["display_order"] == 0
    assert work["cover_image"] == ""
    assert work["images"] == []


def test_create_keeps_explicit_slug_tags_and_specs(admin_client):
    work = _create(
        admin_client,
        title="Mode Sonnet",
        slug="sonnet-ink",
        tags="tactile, 65%, , lubed",
        specs_json=json.dumps({"switches": "Zealios 67g", "weight": 1.2}),
        completed_at="2025-11-02",
    )
    assert work["slug"] == "sonnet-ink"
    assert work["tags"] == ["tactile", "65%", "lubed"]
    assert work["specs"] == {"switches": "Zealios 67g", "weight": "1.2"}
    assert work["completed_at"] == "2025-11-02"


def test_create_rejects_invalid_specs(admin_client, storage):
    resp = admin_client.post(
        BASE,
        data={"title": "Broken", "specs_json": "{switches"},
        files=[("cover", image_file())],
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid specs JSON"
    assert storage.uploads == []


def test_duplicate_slug_conflicts(admin_client):
    _create(admin_client, title="Same Name")
    resp = admin_client.post(BASE, data={"title": "Same Name"})
    assert resp.status_code == 409


def test_create_uploads_cover_and_gallery(admin_client, storage):
    work = _with_images(admin_client)
    folders = [entry[2] for entry in storage.uploads]
    assert folders == ["past-works/covers", "past-works/gallery", "past-works/gallery"]
    assert work["cover_image"] == storage.uploads[0][1]
    assert work["images"] == [storage.uploads[1][1], storage.uploads[2][1]]


def test_update_without_files_keeps_images(admin_client, storage):
    work = _with_images(admin_client)
    storage.log.clear()

    resp = admin_client.put(f"{BASE}/{work['id']}", data={"title": "Renamed", "slug": work["slug"]})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["title"] == "Renamed"
    assert body["cover_image"] == work["cover_image"]
    assert body["images"] == work["images"]
    assert storage.log == []


def test_update_drops_unkept_images_and_replaces_cover(admin_client, storage):
    work = _with_images(admin_client)
    storage.log.clear()
    keep, drop = work["images"]

    resp = admin_client.put(
        f"{BASE}/{work['id']}",
        data={"title": work["title"], "kept_images": json.dumps([keep])},
        files=[("cover", image_file("new-cover.png")), ("images", image_file("extra.png"))],
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()

    new_cover, extra = storage.uploads[0][1], storage.uploads[1][1]
    assert body["cover_image"] == new_cover
    assert body["images"] == [keep, extra]
    # Old files go only after the row points at the new ones
    assert [entry[0] for entry in storage.log] == ["upload", "upload", "remove", "remove"]
    assert storage.removes == [work["cover_image"], drop]


def test_update_rejects_foreign_kept_image(admin_client, storage):
    work = _with_images(admin_client)
    resp = admin_client.put(
        f"{BASE}/{work['id']}",
        data={"title": work["title"], "kept_images": json.dumps(["https://elsewhere/x.png"])},
    )
    assert resp.status_code == 400


def test_delete_removes_every_file_before_row(admin_client, storage):
    work = _with_images(admin_client)
    storage.log.clear()

    stop = record_row_deletes(PastWork, storage.log)
    try:
        resp = admin_client.delete(f"{BASE}/{work['id']}")
    finally:
        stop()

    assert resp.status_code == 200
    assert storage.log == [
        ("remove", work["cover_image"]),
        ("remove", work["images"][0]),
        ("remove", work["images"][1]),
        ("delete_row", work["id"]),
    ]
    assert admin_client.get(BASE).json() == []


def test_list_includes_hidden_and_move_swaps(admin_client):
    ids = seed(
        PastWork(title="A", slug="a", display_order=0, visible=True),
        PastWork(title="B", slug="b", display_order=1, visible=False),
    )
    works = admin_client.get(BASE).json()
    assert [w["slug"] for w in works] == ["a", "b"]

    resp = admin_client.post(f"{BASE}/{ids[1]}/move", json={"direction": -1})
    assert resp.status_code == 200
    assert [w["slug"] for w in resp.json()] == ["b", "a"]
