from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from vidshare.services._shared.dto import OwnerOut, owner_out


@dataclass(frozen=True, slots=True)
class TweetOut:
    id: int
    content: str
    owner: OwnerOut
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, tweet: Any) -> TweetOut:
        return cls(
            id=tweet.id,
            content=tweet.content,
            owner=owner_out(tweet.owner),
            created_at=tweet.created_at,
            updated_at=tweet.updated_at,
        )
