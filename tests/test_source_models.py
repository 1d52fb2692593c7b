"""
Tests for the raw source record models (aliases + lenient coercion).

Usage:
    pytest tests/test_source_models.py -v
"""

import pytest
from src.insights.source_models import CommentRecord, PostRecord, ReviewRecord, parse_rating


class TestParseRating:

    @pytest.mark.parametrize("value,expected", [
        (4, 4.0),
        (3.5, 3.5),
        ("5.0 out of 5 stars", 5.0),
        ("4,5 van 5", 4.5),
        ("  2 ", 2.0),
        ("n/a", 0.0),
        (None, 0.0),
        (True, 0.0),
    ])
    def test_parse_rating(self, value, expected):
        assert parse_rating(value) == expected


class TestReviewRecord:

    def test_aliases_and_coercion(self):
        record = ReviewRecord.model_validate({"review_id": 12, "body": "Works", "rating": "5", "stars": 9})
        assert record.id == "12"
        assert record.content == "Works"
        assert record.rating == 5.0

    def test_full_text(self):
        record = ReviewRecord.model_validate({"title": "Great", "text": "battery lasts"})
        assert record.full_text == "Great battery lasts"
        assert ReviewRecord().full_text == ""

    def test_none_fields(self):
        record = ReviewRecord.model_validate({"id": None, "content": None, "rating": None})
        assert record.id == ""
        assert record.content == ""
        assert record.rating == 0.0


class TestPostRecord:

    def test_forum_aliases(self):
        post = PostRecord.model_validate({
            "id": "t3_x",
            "title": "Help",
            "selftext": "My phone broke",
            "score": "17",
            "num_comments": None,
        })
        assert post.text == "My phone broke"
        assert post.full_text == "Help My phone broke"
        assert post.likes == 17
        assert post.comments_count == 0
        assert post.shares is None

    def test_video_aliases_and_engagement(self):
        post = PostRecord.model_validate({
            "description": "clip",
            "like_count": 10,
            "comment_count": "3",
            "share_count": 2,
            "play_count": 500,
        })
        assert post.text == "clip"
        assert post.views == 500
        assert post.engagement == 15

    def test_negative_counts_clamped(self):
        assert PostRecord.model_validate({"likes": -4}).likes == 0

    def test_unusable_comments_dropped(self):
        post = PostRecord.model_validate({"comments": [{"body": "ok"}, "spam", None]})
        assert [c.text for c in post.comments] == ["ok"]
        assert PostRecord.model_validate({"comments": "none"}).comments == []

    def test_comment_aliases(self):
        comment = CommentRecord.model_validate({"id": 5, "content": "nice", "score": "3"})
        assert comment.id == "5"
        assert comment.text == "nice"
        assert comment.likes == 3
