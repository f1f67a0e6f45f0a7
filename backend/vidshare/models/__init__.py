from vidshare.models.comment import Comment
from vidshare.models.like import Like
from vidshare.models.subscription import Subscription
from vidshare.models.tweet import Tweet
from vidshare.models.user import User, WatchHistoryEntry
from vidshare.models.video import Video

__all__ = [
    "Comment",
    "Like",
    "Subscription",
    "Tweet",
    "User",
    "Video",
    "WatchHistoryEntry",
]
