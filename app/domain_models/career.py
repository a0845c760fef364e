# ==============================================================================
# CAREER MODELS - Careers & Vacancies
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain_models.base import CreatedAtMixin, SQLBase


class Career(SQLBase, CreatedAtMixin):
    """
    Career track (e.g. Medical Sales Representative).

    Attributes:
        title: Track name
        description: What the track involves
    """

    __tablename__ = "careers"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    vacancies: Mapped[List["Vacancy"]] = relationship(back_populates="career")


class Vacancy(SQLBase, CreatedAtMixin):
    """
    Open position within a career track.

    Attributes:
        career_id: Parent career track
        position: Job title
        location: City and country
        salary_range: Display string, e.g. "$80k - $120k"
        is_active: Only active vacancies are listed
    """

    __tablename__ = "vacancies"

    career_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("careers.id", ondelete="SET NULL"),
        nullable=True,
    )
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    salary_range: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        server_default=true(),
        nullable=False,
    )

    career: Mapped[Optional[Career]] = relationship(back_populates="vacancies")
