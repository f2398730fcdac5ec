"""
SQLAlchemy models for the content tables.
All database models inherit from Base (declarative base).
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, JSON
from sqlalchemy.sql import func
from app.database import Base


GALLERY_SIZES = ("large", "medium", "small")
GALLERY_COLUMNS = 3


class GalleryItem(Base):
    """
    Home page gallery image.
    column_index picks one of three masonry columns; size controls the tile height.
    """
    __tablename__ = "gallery_items"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=False)
    size = Column(String(16), nullable=False, default="medium")
    column_index = Column(Integer, nullable=False, default=0)
    display_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class SiteContent(Base):
    """One row per editable copy slot on the public site (hero title, etc.)."""
    __tablename__ = "site_content"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False, unique=True, index=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class _SectionColumns:
    id = Column(Integer, primary_key=True, index=True)
    section_type = Column(String(32), nullable=False)
    title = Column(String, nullable=False)
    content = Column(JSON, nullable=False, default=dict)
    display_order = Column(Integer, nullable=False, default=0, index=True)
    visible = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class CommissionSection(_SectionColumns, Base):
    """Block of the commission page; content shape depends on section_type."""
    __tablename__ = "commission_sections"


class AboutSection(_SectionColumns, Base):
    """Block of the about page; content shape depends on section_type."""
    __tablename__ = "about_sections"


class PastWork(Base):
    """
    Completed keyboard build shown on the past works page.
    images holds gallery URLs in display order; cover_image is shown first.
    """
    __tablename__ = "past_works"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")
    cover_image = Column(String, nullable=False, default="")
    images = Column(JSON, nullable=False, default=list)
    specs = Column(JSON, nullable=False, default=dict)
    tags = Column(JSON, nullable=False, default=list)
    visible = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0, index=True)
    completed_at = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
