"""
Tests for the platform enrichers (forum, engagement, reviews).

Usage:
    pytest tests/test_enrichers.py -v
"""

import pytest
from src.insights.engine_config import EngineConfig
from src.insights.enrichers import (
    EngagementEnricher, ForumEnricher, ReviewEnricher,
    feature_sentiment_score, rating_sentiment,
)
from src.insights.insight_models import Sentiment
from src.insights.source_models import ReviewRecord


# ============================================================================
# TEST DATA
# ============================================================================

def make_review(content: str, rating, review_id: str = "R_TEST", title: str = "") -> dict:
    return {"review_id": review_id, "title": title, "content": content, "rating": rating}


BATTERY_REVIEWS = [
    make_review("fantastic battery life", 5, "R1"),
    make_review("battery life is terrible", 1, "R2"),
]


# ============================================================================
# REVIEW ENRICHER
# ============================================================================

class TestRatingBuckets:

    @pytest.mark.parametrize("rating,expected", [
        (5.0, Sentiment.POSITIVE),
        (4.0, Sentiment.POSITIVE),
        (3.9, Sentiment.NEUTRAL),
        (3.0, Sentiment.NEUTRAL),
        (2.1, Sentiment.NEUTRAL),
        (2.0, Sentiment.NEGATIVE),
        (0.0, Sentiment.NEGATIVE),
    ])
    def test_rating_sentiment(self, rating, expected):
        assert rating_sentiment(rating) == expected

    def test_feature_sentiment_score(self):
        assert feature_sentiment_score(0, 0) == 0.0
        assert feature_sentiment_score(1, 1) == 0.0
        assert feature_sentiment_score(3, 1) == 0.5
        assert feature_sentiment_score(0, 2) == -1.0


class TestReviewEnricher:

    def setup_method(self):
        self.enricher = ReviewEnricher(platform="amazon")

    def test_battery_life_feature_sentiment(self):
        result = self.enricher.enrich(BATTERY_REVIEWS)

        feature = result.feature("battery life")
        assert feature is not None
        assert feature.positive_mentions == 1
        assert feature.negative_mentions == 1
        assert feature.sentiment_score == 0
        assert feature.sentiment == Sentiment.NEUTRAL
        assert feature.frequency == 2

    def test_reviews_bucketed_by_rating(self):
        result = self.enricher.enrich(BATTERY_REVIEWS + [make_review("it is okay", 3, "R3")])

        assert result.reviews_by_sentiment == {
            "positive": ("R1",),
            "neutral": ("R3",),
            "negative": ("R2",),
        }
        assert [r.insight.raw_sentiment for r in result.reviews] == [
            Sentiment.POSITIVE, Sentiment.NEGATIVE, Sentiment.NEUTRAL,
        ]
        assert result.insights.summary.sentiment_breakdown == {
            "positive": 1, "neutral": 1, "negative": 1,
        }

    def test_negative_aspects_come_from_negative_reviews(self):
        result = self.enricher.enrich(BATTERY_REVIEWS)

        assert len(result.negative_aspects.all) == 1
        aspect = result.negative_aspects.all[0]
        assert aspect.review_id == "R2"
        assert aspect.source == "pain_point"
        assert result.summary.total_negative_aspects == 1
        assert result.summary.improvement_areas == (aspect.category,)

    def test_positive_aspects_only_from_positive_reviews(self):
        wish = "I wish the price was lower"
        result = self.enricher.enrich([
            make_review(wish, 5, "happy"),
            make_review(wish, 1, "unhappy"),
        ])

        assert [a.review_id for a in result.positive_aspects.all] == ["happy"]
        assert result.positive_aspects.all[0].category == "price"
        assert result.positive_aspects.all[0].source == "desire"
        assert result.summary.top_positive_categories == ("price",)
        # desires still count in the overall aggregation
        assert result.summary.total_desires == 2

    def test_title_is_part_of_review_text(self):
        result = self.enricher.enrich([make_review("", 1, "R1", title="I hate it")])
        assert len(result.reviews[0].insight.pain_points) == 1

    def test_string_ratings(self):
        result = self.enricher.enrich([
            make_review("ok", "4,5 van 5", "nl"),
            make_review("ok", "1.0 out of 5 stars", "en"),
            make_review("ok", "n/a", "missing"),
        ])
        assert result.reviews_by_sentiment["positive"] == ("nl",)
        assert result.reviews_by_sentiment["negative"] == ("en", "missing")

    def test_malformed_records_are_skipped(self):
        result = self.enricher.enrich([
            make_review("fantastic battery life", 5, "ok"),
            "garbage",
            None,
            42,
        ])
        assert [r.source_id for r in result.reviews] == ["ok"]

    def test_accepts_models_and_assigns_missing_ids(self):
        record = ReviewRecord(content="battery life is terrible", rating=1)
        result = self.enricher.enrich([record, {"content": "fine", "rating": 4}])
        assert [r.source_id for r in result.reviews] == ["amazon-review-0", "amazon-review-1"]

    def test_default_domain_is_ecommerce(self):
        result = self.enricher.enrich(BATTERY_REVIEWS)
        assert result.domain == "ecommerce"
        assert ReviewEnricher().enrich([], domain="tech").domain == "tech"

    def test_empty_collection(self):
        result = self.enricher.enrich([])
        assert result.reviews == ()
        assert result.product_features == ()
        assert result.summary.improvement_areas == ()
        assert self.enricher.enrich(None).reviews == ()


# ============================================================================
# FORUM ENRICHER
# ============================================================================

class TestForumEnricher:

    def setup_method(self):
        self.enricher = ForumEnricher()
        self.posts = [
            {
                "id": "p1",
                "title": "I hate this phone",
                "selftext": "It is fine otherwise",
                "comments": [
                    {"body": "I want a better battery"},
                    {"id": "c2", "body": ""},
                ],
            },
            {"id": "p2", "title": "Just a photo", "selftext": ""},
        ]

    def test_posts_and_comments_are_documents(self):
        result = self.enricher.enrich(self.posts, query="smartphone")

        assert result.platform == "reddit"
        assert result.insights.summary.documents_analyzed == 4
        assert [p.source_id for p in result.posts] == ["p1", "p2"]

        first = result.posts[0]
        assert len(first.insight.pain_points) == 1
        assert [c.source_id for c in first.comments] == ["p1/comment-0", "c2"]
        assert len(first.comments[0].desires) == 1
        assert first.comments[1].is_empty

    def test_aggregation_includes_comments(self):
        result = self.enricher.enrich(self.posts)
        assert result.insights.summary.totals.pain_points == 1
        assert result.insights.summary.totals.desires == 1

    def test_domain_inferred_from_query(self):
        assert self.enricher.enrich(self.posts, query="best skincare").domain == "beauty"
        assert self.enricher.enrich(self.posts, query="smartphone").domain == "tech"
        assert self.enricher.enrich(self.posts).domain == "general"

    def test_explicit_domain_wins(self):
        result = self.enricher.enrich(self.posts, query="skincare", domain="food")
        assert result.domain == "food"

    def test_bad_posts_skipped(self):
        result = self.enricher.enrich([self.posts[1], "garbage", None])
        assert [p.source_id for p in result.posts] == ["p2"]


# ============================================================================
# ENGAGEMENT ENRICHER
# ============================================================================

class TestEngagementEnricher:

    def setup_method(self):
        self.enricher = EngagementEnricher(platform="tiktok", config=EngineConfig(most_engaged_limit=2))
        self.videos = [
            {"id": "A", "description": "nice video", "likes": 10, "comments_count": 5, "views": 100},
            {"id": "B", "caption": "cool", "like_count": 20, "comment_count": 5, "share_count": 5, "play_count": 200},
            {"id": "C", "text": "fine", "likes": 15, "comments_count": 0, "shares": 0},
        ]

    def test_engagement_formula_and_ordering(self):
        result = self.enricher.enrich(self.videos)

        assert [(s.source_id, s.engagement) for s in result.engagement] == [
            ("B", 30), ("A", 15), ("C", 15),
        ]
        assert [s.source_id for s in result.most_engaged] == ["B", "A"]

    def test_averages(self):
        result = self.enricher.enrich(self.videos)
        assert result.average_engagement == 20.0
        assert result.average_views == 100.0

    def test_title_is_not_analysed(self):
        result = self.enricher.enrich([{"id": "v", "title": "I hate it", "description": "nice video"}])
        assert result.insights.summary.totals.pain_points == 0

    def test_comments_counted_per_video(self):
        result = self.enricher.enrich([{
            "id": "v",
            "description": "Ik haat het dat de foto's altijd wazig zijn.",
            "comments": [{"text": "I hate this too"}],
        }])
        assert result.engagement[0].pain_points == 1
        assert result.insights.summary.totals.pain_points == 2

    def test_platform_name_and_empty_input(self):
        result = EngagementEnricher(platform="instagram").enrich([])
        assert result.platform == "instagram"
        assert result.engagement == ()
        assert result.average_engagement == 0.0
        assert result.average_views == 0.0
