"""
Typed content for commission and about page sections.

Each section row stores its content as a JSON object whose shape depends on
section_type. The models below describe every shape; drafts are parsed and
validated here before anything is written, and unknown or missing fields are
rejected.
"""
import json
from typing import Dict, List, Literal, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from app.exceptions import ContentValidationError


class _Content(BaseModel):
    model_config = ConfigDict(extra="forbid")


class _LabelPrice(_Content):
    label: str
    price: str


# Commission page

class StatusContent(_Content):
    status: Literal["open", "closed"]
    note: Optional[str] = None


class IntroContent(_Content):
    text: str
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class ServicesContent(_Content):
    items: List[str]


class PricingContent(_Content):
    note: Optional[str] = None
    shipping_note: Optional[str] = None
    tiers: List[_LabelPrice]
    extras: List[_LabelPrice] = []


class _Step(_Content):
    step: int
    title: str
    description: str


class StepsContent(_Content):
    items: List[_Step]


class _Question(_Content):
    question: str
    answer: str


class FaqContent(_Content):
    items: List[_Question]


class CommissionLinksContent(_Content):
    form_url: Optional[str] = None
    form_label: Optional[str] = None
    note: Optional[str] = None


# About page

class HeroContent(_Content):
    subtitle: str


class BioContent(_Content):
    text: str
    image_url: Optional[str] = None
    image_alt: Optional[str] = None


class PhilosophyContent(_Content):
    text: str
    items: List[str] = []


class DiscordContent(_Content):
    discord_ids: List[str]
    discord_invite: Optional[str] = None
    note: Optional[str] = None


class _SocialLink(_Content):
    label: str
    url: str


class AboutLinksContent(_Content):
    items: List[_SocialLink]


COMMISSION_CONTENT: Dict[str, Type[_Content]] = {
    "status": StatusContent,
    "intro": IntroContent,
    "services": ServicesContent,
    "pricing": PricingContent,
    "steps": StepsContent,
    "faq": FaqContent,
    "links": CommissionLinksContent,
}

ABOUT_CONTENT: Dict[str, Type[_Content]] = {
    "hero": HeroContent,
    "bio": BioContent,
    "philosophy": PhilosophyContent,
    "discord": DiscordContent,
    "links": AboutLinksContent,
}

COMMISSION_TYPE_LABELS = {
    "status": "Status Banner",
    "intro": "Introduction",
    "services": "Services List",
    "pricing": "Pricing",
    "steps": "How It Works",
    "faq": "FAQ",
    "links": "Commission Form Link",
}

ABOUT_TYPE_LABELS = {
    "hero": "Hero",
    "bio": "Bio / About Me",
    "philosophy": "Philosophy",
    "discord": "Discord Profiles",
    "links": "Social Links",
}

COMMISSION_CONTENT_HINTS = {
    "status": '{ "status": "open" or "closed", "note": "..." }',
    "intro": '{ "text": "Your intro paragraph...", "image_url": "https://... (optional)", "image_alt": "alt text (optional)" }',
    "services": '{ "items": ["Service 1", "Service 2", ...] }',
    "pricing": '{ "note": "...", "shipping_note": "... (optional)", "tiers": [{ "label": "60%", "price": "$80" }], "extras": [{ "label": "Lube", "price": "$10" }] }',
    "steps": '{ "items": [{ "step": 1, "title": "...", "description": "..." }] }',
    "faq": '{ "items": [{ "question": "...", "answer": "..." }] }',
    "links": '{ "form_url": "https://... (leave empty for placeholder form)", "form_label": "Submit Request", "note": "..." }',
}

ABOUT_CONTENT_HINTS = {
    "hero": '{ "subtitle": "The person behind the builds." }',
    "bio": '{ "text": "Your bio...", "image_url": "https://... (optional)", "image_alt": "alt text (optional)" }',
    "philosophy": '{ "text": "Your philosophy...", "items": ["Value 1", "Value 2", ...] }',
    "discord": '{ "discord_ids": ["123456789012345678"], "discord_invite": "server_id (optional)", "note": "..." }',
    "links": '{ "items": [{ "label": "Instagram", "url": "https://..." }, ...] }',
}


def parse_json_object(raw_text: str, error_message: str = "Invalid JSON") -> dict:
    """
    Parse raw JSON text typed by the operator.

    Raises:
        ContentValidationError: if the text is not valid JSON or not an object
    """
    try:
        parsed = json.loads(raw_text)
    except (TypeError, ValueError):
        raise ContentValidationError(error_message)

    if not isinstance(parsed, dict):
        raise ContentValidationError(f"{error_message}: expected a JSON object")
    return parsed


def validate_content(registry: Dict[str, Type[_Content]], section_type: str, content: dict) -> dict:
    """
    Validate a content object against the model registered for section_type.

    Returns:
        dict: normalized content with unset optional fields dropped
    """
    model = registry.get(section_type)
    if model is None:
        raise ContentValidationError(f"Unknown section type: {section_type}")

    try:
        validated = model.model_validate(content)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'content'}: {err['msg']}"
            for err in e.errors()
        )
        raise ContentValidationError(f"Invalid content for '{section_type}' section: {problems}")

    return validated.model_dump(exclude_none=True)


def parse_content_draft(registry: Dict[str, Type[_Content]], section_type: str, raw_text: str) -> dict:
    """Parse a raw JSON draft and validate it for the given section type."""
    return validate_content(registry, section_type, parse_json_object(raw_text))
