"""
Section editor for the commission and about pages.

Both pages are built from ordered sections whose content is typed JSON.
The operator edits the raw JSON text; it is parsed and checked against the
section type before anything is written.
"""
import logging
from typing import Dict, Optional

from app.exceptions import DraftValidationError
from app.models import AboutSection, CommissionSection
from app.section_content import (
    ABOUT_CONTENT,
    ABOUT_CONTENT_HINTS,
    ABOUT_TYPE_LABELS,
    COMMISSION_CONTENT,
    COMMISSION_CONTENT_HINTS,
    COMMISSION_TYPE_LABELS,
    parse_content_draft,
)
from app.services.ordering import OrderedEditor, next_display_order

logger = logging.getLogger(__name__)


class SectionEditor(OrderedEditor):
    """Generic editor; use CommissionSectionEditor or AboutSectionEditor."""

    content_types: Dict[str, type] = {}
    type_labels: Dict[str, str] = {}
    content_hints: Dict[str, str] = {}

    def label(self, section_type: str) -> str:
        return self.type_labels.get(section_type, section_type)

    async def create(
        self,
        section_type: str,
        title: str,
        content_json: str = "{}",
        visible: bool = True,
    ):
        if section_type not in self.content_types:
            raise DraftValidationError(
                f"Section type must be one of: {', '.join(self.content_types)}"
            )
        content = parse_content_draft(self.content_types, section_type, content_json)

        section = self.model(
            section_type=section_type,
            title=title.strip(),
            content=content,
            visible=visible,
            display_order=await next_display_order(self.db, self.model),
        )
        self.db.add(section)
        await self._commit(section)
        logger.info(f"{self.table}: added '{self.label(section_type)}' section {section.id}")
        return section

    async def update(
        self,
        section_id: int,
        title: str,
        content_json: str,
        visible: Optional[bool] = None,
    ):
        """
        Save the title, content and visibility of a section.

        Raises:
            ContentValidationError: "Invalid JSON" or content not matching the
                section type; the stored row is left untouched
        """
        section = await self.get(section_id)
        content = parse_content_draft(self.content_types, section.section_type, content_json)

        section.title = title.strip()
        section.content = content
        if visible is not None:
            section.visible = visible
        await self._commit(section)
        logger.info(f"{self.table}: '{self.label(section.section_type)}' updated")
        return section

    async def delete(self, section_id: int):
        section = await self.get(section_id)
        await self.db.delete(section)
        await self._commit()
        logger.info(f"{self.table}: deleted section {section_id}")


class CommissionSectionEditor(SectionEditor):
    model = CommissionSection
    content_types = COMMISSION_CONTENT
    type_labels = COMMISSION_TYPE_LABELS
    content_hints = COMMISSION_CONTENT_HINTS


class AboutSectionEditor(SectionEditor):
    model = AboutSection
    content_types = ABOUT_CONTENT
    type_labels = ABOUT_TYPE_LABELS
    content_hints = ABOUT_CONTENT_HINTS
