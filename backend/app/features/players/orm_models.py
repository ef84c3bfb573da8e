"""SQLAlchemy 2.0 ORM models for the players feature.

The ``player_accounts`` table caches account lookups so repeated searches for
the same Riot ID do not hit the HenrikDev API.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import (
    DateTime as SQLDateTime,
    Index,
    Integer,
    JSON,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.models import Base


class PlayerAccountORM(Base):
    """Cached Valorant account."""

    __tablename__ = "player_accounts"
    __table_args__ = (
        Index("idx_player_accounts_name_tag", "name", "tag"),
    )

    puuid: Mapped[str] = mapped_column(
        String(78),
        primary_key=True,
        comment="Player's universally unique identifier",
    )

    name: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Riot ID game name",
    )

    tag: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="Riot ID tag line",
    )

    region: Mapped[Optional[str]] = mapped_column(
        String(8),
        nullable=True,
        comment="Account region reported by the provider (e.g., kr, eu)",
    )

    account_level: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Account level at time of caching",
    )

    card_small: Mapped[Optional[str]] = mapped_column(
        String(256),
        nullable=True,
        comment="Small player card image URL",
    )

    payload: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Account payload exactly as returned by the provider",
    )

    created_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When this account was first cached",
    )

    updated_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="When this account was last refreshed",
    )

    @property
    def riot_id(self) -> str:
        """Riot ID as ``name#tag``."""
        return f"{self.name}#{self.tag}"

    def __repr__(self) -> str:
        return f"<PlayerAccountORM(puuid={self.puuid}, riot_id={self.riot_id})>"
