"""SQLAlchemy models."""
from __future__ import annotations

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shogun_slogans.db import Base


class CssTransient(Base):
    """Compiled CSS keyed by cache key, valid until ``expires_at`` (unix time)."""

    __tablename__ = "css_transients"

    key: Mapped[str] = mapped_column(String(191), primary_key=True)
    css: Mapped[str] = mapped_column(Text)
    expires_at: Mapped[float] = mapped_column(Float, index=True)
