"""Unit tests for VideoRepository and the shared paging helpers."""

import pytest

from tests.factories.content import VideoFactory
from tests.factories.relation import VideoLikeFactory
from tests.factories.user import UserFactory
from vidshare.repositories.base import Pagination, parse_sort_tokens
from vidshare.repositories.video import VideoRepository


def test_parse_sort_tokens():
    assert parse_sort_tokens(["-createdAt", " views ", "", "-"]) == [
        ("createdAt", True),
        ("views", False),
    ]


class TestVideoRepository:
    @pytest.fixture()
    def repo(self):
        return VideoRepository()

    def test_list_published_hides_drafts(self, repo):
        owner = UserFactory()
        VideoFactory(owner=owner, title="Public")
        VideoFactory(owner=owner, title="Draft", is_published=False)

        page = repo.list_published(Pagination(page=1, limit=10, sort=[]))
        assert [v.title for v in page.items] == ["Public"]
        assert page.total == 1

    def test_list_published_filters(self, repo):
        alice, bob = UserFactory(), UserFactory()
        VideoFactory(owner=alice, title="Baking Bread", description="flour")
        VideoFactory(owner=alice, title="Cycling", description="Bread on the road")
        VideoFactory(owner=bob, title="bread again", description="")

        page = repo.list_published(Pagination(1, 10, []), query="BREAD")
        assert page.total == 3

        page = repo.list_published(Pagination(1, 10, []), query="bread", owner_id=alice.id)
        assert {v.title for v in page.items} == {"Baking Bread", "Cycling"}

    def test_sorting_and_paging(self, repo):
        owner = UserFactory()
        for views in (5, 50, 10):
            VideoFactory(owner=owner, views=views)

        page = repo.list_published(Pagination(page=1, limit=2, sort=["-views"]))
        assert [v.views for v in page.items] == [50, 10]
        assert page.total == 3

        page = repo.list_published(Pagination(page=2, limit=2, sort=["-views"]))
        assert [v.views for v in page.items] == [5]

        # Unknown tokens fall back to the default order instead of failing.
        page = repo.list_published(Pagination(page=1, limit=10, sort=["password_hash"]))
        assert page.total == 3

    def test_get_with_stats(self, repo):
        video = VideoFactory()
        fan = UserFactory()
        VideoLikeFactory(video=video, liked_by=fan)
        VideoLikeFactory(video=video)

        row = repo.get_with_stats(video.id, viewer_id=fan.id)
        assert row is not None
        loaded, likes_count, is_liked = row
        assert loaded.id == video.id
        assert likes_count == 2
        assert bool(is_liked) is True

        _, _, is_liked = repo.get_with_stats(video.id, viewer_id=video.owner_id)
        assert bool(is_liked) is False
        assert repo.get_with_stats(999_999, viewer_id=None) is None

    def test_increment_views(self, repo):
        video = VideoFactory(views=3)
        repo.increment_views(video)
        repo.increment_views(video)
        assert video.views == 5
        assert repo.get(video.id).views == 5
