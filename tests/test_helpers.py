import io

import pytest
from PIL import Image

from app.database import describe_database_url
from app.exceptions import ContentValidationError
from app.section_content import ABOUT_CONTENT, COMMISSION_CONTENT, parse_content_draft, validate_content
from app.services.storage import extract_public_id_from_url, object_name
from app.utils.helpers import clamp, parse_tags, slugify
from app.utils.image_converter import convert_to_webp


@pytest.mark.parametrize("title, slug", [
    ("Tofu65 Lavender", "tofu65-lavender"),
    ("  Mode Sonnet -- Ink!  ", "mode-sonnet-ink"),
    ("GMK Olivia++", "gmk-olivia"),
    ("???", ""),
])
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_parse_tags_drops_blanks():
    assert parse_tags(" tactile,, 65% ,") == ["tactile", "65%"]
    assert parse_tags("") == []


def test_clamp():
    assert clamp(-3, 0, 2) == 0
    assert clamp(9, 0, 2) == 2
    assert clamp(1, 0, 2) == 1


def test_extract_public_id_from_url():
    url = "https://res.cloudinary.com/demo/image/upload/v1712345/slowwwy/gallery/1712-abc.webp"
    assert extract_public_id_from_url(url) == "slowwwy/gallery/1712-abc"
    assert extract_public_id_from_url("https://res.cloudinary.com/demo/image/upload/logo.png") == "logo"


def test_extract_public_id_rejects_foreign_urls():
    with pytest.raises(ValueError):
        extract_public_id_from_url("https://example.com/picture.png")


def test_object_names_are_unique():
    assert object_name() != object_name()


def test_parse_content_draft_normalizes_optional_fields():
    content = parse_content_draft(COMMISSION_CONTENT, "pricing", '{"tiers": [{"label": "60%", "price": "$80"}]}')
    assert content == {"tiers": [{"label": "60%", "price": "$80"}], "extras": []}


def test_validate_content_rejects_missing_and_extra_fields():
    with pytest.raises(ContentValidationError):
        validate_content(ABOUT_CONTENT, "discord", {})
    with pytest.raises(ContentValidationError):
        validate_content(ABOUT_CONTENT, "hero", {"subtitle": "x", "title": "y"})
    with pytest.raises(ContentValidationError):
        validate_content(ABOUT_CONTENT, "status", {"status": "open"})


def test_convert_to_webp():
    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), "purple").save(buffer, format="PNG")

    converted, ok = convert_to_webp(buffer.getvalue())
    assert ok
    assert Image.open(io.BytesIO(converted)).format == "WEBP"


def test_convert_to_webp_returns_original_for_non_images():
    data = b"not an image"
    assert convert_to_webp(data) == (data, False)


@pytest.mark.parametrize("url", ["", "mysql://db.example.com/app", "postgresql+asyncpg:///nohost"])
def test_describe_database_url_rejects_unusable_urls(url):
    with pytest.raises(ValueError):
        describe_database_url(url)
