"""Column mixins shared by the vidshare tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def _tz_now_column(*, on_update: bool = False) -> Mapped[datetime]:
    extra = {"onupdate": func.now()} if on_update else {}
    return mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now(), **extra)


class PKMixin:
    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """``created_at``/``updated_at`` maintained by the database clock."""

    created_at: Mapped[datetime] = _tz_now_column()
    updated_at: Mapped[datetime] = _tz_now_column(on_update=True)


class ReprMixin:
    """``<Video id=3 title='Intro'>``; models name extra fields in ``__repr_fields__``."""

    __repr_fields__: tuple[str, ...] = ()

    def __repr__(self) -> str:
        shown = {"id": getattr(self, "id", None)}
        shown.update((name, getattr(self, name, None)) for name in self.__repr_fields__)
        body = " ".join(
            f"{key}={value}" if key == "id" else f"{key}={value!r}" for key, value in shown.items()
        )
        return f"<{type(self).__name__} {body}>"
