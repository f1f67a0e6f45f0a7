"""Factories for videos, tweets and comments."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from vidshare.models.comment import Comment
from vidshare.models.tweet import Tweet
from vidshare.models.video import Video


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Video {n}")
    description = factory.Faker("sentence")
    video_file = factory.Sequence(lambda n: f"https://media.example.test/videos/{n}.mp4")
    thumbnail = factory.Sequence(lambda n: f"https://media.example.test/thumbs/{n}.jpg")
    duration = 120.0
    views = 0
    is_published = True


class TweetFactory(BaseFactory):
    class Meta:
        model = Tweet

    id = None
    owner = factory.SubFactory(UserFactory)
    content = factory.Faker("sentence")


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    owner = factory.SubFactory(UserFactory)
    video = factory.SubFactory(VideoFactory)
    content = factory.Faker("sentence")
