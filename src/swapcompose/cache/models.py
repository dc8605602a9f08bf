"""SQLAlchemy models for the persistent set cache."""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class CacheSetMember(Base):
    """One member of a named set."""

    __tablename__ = "cache_set_members"
    __table_args__ = (
        UniqueConstraint("set_key", "member", name="uq_cache_set_member"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    set_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    member: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<CacheSetMember {self.set_key}:{self.member}>"
