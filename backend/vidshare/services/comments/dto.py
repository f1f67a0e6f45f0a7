from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from vidshare.services._shared.dto import OwnerOut, owner_out


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    content: str
    video_id: int
    owner: OwnerOut
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, comment: Any) -> CommentOut:
        return cls(
            id=comment.id,
            content=comment.content,
            video_id=comment.video_id,
            owner=owner_out(comment.owner),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
