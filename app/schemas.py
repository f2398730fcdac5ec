"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional


class GalleryItemResponse(BaseModel):
    """Gallery item as returned to the admin panel."""
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: str
    size: str
    column_index: int
    display_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GalleryItemPublicResponse(BaseModel):
    """
    Gallery item for public pages.
    Excludes timestamps not needed by the storefront.
    """
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: str
    size: str
    column_index: int
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class PaginationMetadata(BaseModel):
    """Pagination metadata; next_cursor is "<display_order>:<id>" of the last item returned."""
    next_cursor: Optional[str] = None
    has_more: bool
    total_count: int


class GalleryItemsPageResponse(BaseModel):
    items: List[GalleryItemPublicResponse]
    pagination: PaginationMetadata


class SiteContentResponse(BaseModel):
    id: int
    key: str
    value: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SiteContentCreate(BaseModel):
    key: str = Field(min_length=1, max_length=100)
    value: str = ""


class SiteContentUpdate(BaseModel):
    value: str


class SectionResponse(BaseModel):
    """Commission or about page section."""
    id: int
    section_type: str
    title: str
    content: Dict[str, Any]
    display_order: int
    visible: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SectionPublicResponse(BaseModel):
    id: int
    section_type: str
    title: str
    content: Dict[str, Any]
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class SectionCreate(BaseModel):
    """
    New section. content_json is the raw JSON text typed by the operator;
    it is parsed and validated against section_type on save.
    """
    section_type: str
    title: str
    content_json: str = "{}"
    visible: bool = True


class SectionUpdate(BaseModel):
    title: str
    content_json: str
    # Omitted keeps the stored flag
    visible: Optional[bool] = None


class PastWorkResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    cover_image: str
    images: List[str]
    specs: Dict[str, Any]
    tags: List[str]
    visible: bool
    display_order: int
    completed_at: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PastWorkPublicResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    cover_image: str
    images: List[str]
    specs: Dict[str, Any]
    tags: List[str]
    display_order: int
    completed_at: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class MoveRequest(BaseModel):
    """Move one row up (-1) or down (+1) in its table's display order."""
    direction: Literal[-1, 1]


class LoginRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str


class SessionResponse(BaseModel):
    email: str
    access_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
