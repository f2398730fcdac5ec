from datetime import date

from app.models import AboutSection, CommissionSection, GalleryItem, PastWork, SiteContent
from tests.conftest import seed


def _seed_sections(model, section_type, content):
    seed(
        model(section_type=section_type, title="Shown", content=content, display_order=0, visible=True),
        model(section_type=section_type, title="Hidden", content=content, display_order=1, visible=False),
        model(section_type=section_type, title="Also shown", content=content, display_order=2, visible=True),
    )


def test_home_page_splits_gallery_into_columns(client):
    seed(
        SiteContent(key="hero_title", value="Slowwwy"),
        SiteContent(key="hero_meta", value="Keyboards"),
        GalleryItem(image_url="https://img/a", title="a", column_index=0, display_order=0),
        GalleryItem(image_url="https://img/b", title="b", column_index=2, display_order=1),
        GalleryItem(image_url="https://img/c", title="c", column_index=7, display_order=2),
        GalleryItem(image_url="https://img/d", title="d", column_index=-1, display_order=3),
    )

    body = client.get("/").json()
    assert body["page"] == "home"
    assert body["content"] == {"hero_meta": "Keyboards", "hero_title": "Slowwwy", "gallery_label": ""}

    columns = [[item["title"] for item in column] for column in body["gallery"]["columns"]]
    assert columns == [["a", "d"], [], ["b", "c"]]


def test_about_page_only_shows_visible_sections(client):
    _seed_sections(AboutSection, "hero", {"subtitle": "hi"})
    body = client.get("/about").json()
    assert [s["title"] for s in body["sections"]] == ["Shown", "Also shown"]
    assert "visible" not in body["sections"][0]


def test_commission_page_includes_copy_and_visible_sections(client):
    seed(SiteContent(key="commission_title", value="Commission a build"))
    _seed_sections(CommissionSection, "status", {"status": "open"})

    body = client.get("/commission").json()
    assert body["content"]["commission_title"] == "Commission a build"
    assert [s["title"] for s in body["sections"]] == ["Shown", "Also shown"]
    assert body["sections"][0]["content"] == {"status": "open"}


def test_admin_section_lists_include_hidden_rows_with_badge(admin_client):
    _seed_sections(CommissionSection, "faq", {"items": []})

    body = admin_client.get("/admin/commissions").json()
    assert body["user"] == {"email": "owner@slowwwy.com"}
    assert [(s["title"], s["hidden"]) for s in body["sections"]] == [
        ("Shown", False),
        ("Hidden", True),
        ("Also shown", False),
    ]
    assert body["sections"][0]["label"] == "FAQ"
    assert body["section_types"]["status"] == "Status Banner"


def test_past_works_pages_hide_invisible_builds(client):
    seed(
        PastWork(title="Visible", slug="visible", display_order=0, completed_at=date(2025, 3, 1)),
        PastWork(title="Draft", slug="draft", display_order=1, visible=False),
    )

    body = client.get("/past-works").json()
    assert [w["slug"] for w in body["works"]] == ["visible"]
    assert body["works"][0]["completed_at"] == "2025-03-01"

    assert client.get("/past-works/visible").status_code == 200
    assert client.get("/past-works/draft").status_code == 404
    assert client.get("/past-works/missing").status_code == 404


def test_past_work_detail_lists_cover_first(client):
    seed(PastWork(
        title="Tofu",
        slug="tofu",
        cover_image="https://img/cover",
        images=["https://img/1", "https://img/2"],
        display_order=0,
    ))
    work = client.get("/past-works/tofu").json()["work"]
    assert work["all_images"] == ["https://img/cover", "https://img/1", "https://img/2"]


def test_admin_gallery_page_reports_next_display_order(admin_client):
    seed(*[GalleryItem(image_url=f"https://img/{i}", display_order=i) for i in range(3)])
    body = admin_client.get("/admin").json()
    assert body["page"] == "admin-gallery"
    assert len(body["items"]) == 3
    assert body["next_display_order"] == 3


def test_admin_content_page_labels_known_keys(admin_client):
    seed(SiteContent(key="commission_description", value=""), SiteContent(key="custom_note", value="x"))
    items = {i["key"]: i for i in admin_client.get("/admin/content").json()["items"]}
    assert items["commission_description"]["multiline"] is True
    assert items["custom_note"]["label"] == "custom_note"


def test_static_pages(client):
    assert client.get("/products").json()["page"] == "products"
    assert client.get("/contact").json()["page"] == "contact"
    assert client.get("/health").json()["status"] == "healthy"
