"""
Platform Enrichers
==================

Source-specific orchestration on top of DocumentAnalyzer + InsightAggregator:

    ForumEnricher       Reddit-style threads; domain inferred from the query
    EngagementEnricher  short videos / image posts; ranked by engagement
    ReviewEnricher      product reviews and review-site entries; rating
                        buckets, positive/negative aspects, feature sentiment

Each enricher accepts raw dicts from the fetching layer (or the pydantic
source models). Records that cannot be parsed are logged and skipped.

Usage:
    enricher = ReviewEnricher(platform="amazon")
    result = enricher.enrich(reviews)
    result.feature("battery life").sentiment_score
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .document_analyzer import DocumentAnalyzer
from .engine_config import EngineConfig, DEFAULT_CONFIG
from .insight_aggregator import InsightAggregator, rank_category_names
from .insight_models import (
    AggregatedInsights,
    AnalyzedPost,
    AnalyzedReview,
    AspectView,
    DocumentInsight,
    EngagementInsights,
    EngagementStat,
    FeatureSentiment,
    ForumInsights,
    ReviewAspect,
    ReviewInsights,
    ReviewSummary,
    Sentiment,
)
from .signal_catalog import Domain, FALLBACK_CATEGORY, SignalCatalog, DEFAULT_CATALOG, resolve_domain
from .source_models import PostRecord, ReviewRecord
from .terminology import count_occurrences, normalize

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Rating buckets (stars)
POSITIVE_MIN_RATING = 4.0
NEGATIVE_MAX_RATING = 2.0

TOP_FEATURES = 5
IMPROVEMENT_AREAS = 3


def rating_sentiment(rating: float) -> Sentiment:
    """>= 4 stars positive, <= 2 negative, anything between neutral."""
    if rating >= POSITIVE_MIN_RATING:
        return Sentiment.POSITIVE
    if rating <= NEGATIVE_MAX_RATING:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def feature_sentiment_score(positive_mentions: int, negative_mentions: int) -> float:
    """(pos - neg) / (pos + neg); the denominator is 1 when both are 0."""
    return (positive_mentions - negative_mentions) / ((positive_mentions + negative_mentions) or 1)


class PlatformEnricher:
    """Shared plumbing: record parsing, parallel analysis, aggregation."""

    platform = "generic"
    default_domain = Domain.GENERAL

    def __init__(
        self,
        platform: Optional[str] = None,
        analyzer: Optional[DocumentAnalyzer] = None,
        aggregator: Optional[InsightAggregator] = None,
        catalog: Optional[SignalCatalog] = None,
        config: Optional[EngineConfig] = None,
    ):
        if platform:
            self.platform = platform
        self.catalog = catalog or DEFAULT_CATALOG
        self.config = config or DEFAULT_CONFIG
        self.analyzer = analyzer or DocumentAnalyzer(self.catalog, self.config)
        self.aggregator = aggregator or InsightAggregator(self.config)

    def _records(self, raw: Optional[Iterable[Any]], model: Type[RecordT]) -> List[RecordT]:
        records = []
        for index, item in enumerate(raw or ()):
            if isinstance(item, model):
                records.append(item)
                continue
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed {self.platform} record #{index}: {e.error_count()} validation errors",
                    extra={"platform": self.platform},
                )
        return records

    def _domain(self, domain: Union[str, Domain, None]) -> Domain:
        if domain is None:
            return self.default_domain
        return resolve_domain(domain)

    def _analyze_posts(
        self,
        posts: Sequence[PostRecord],
        domain: Domain,
        text_of,
    ) -> Tuple[List[AnalyzedPost], List[DocumentInsight]]:
        """
        Analyse every post and its comments in one parallel batch.

        Returns the per-post results and the flat insight list
        (post, its comments, next post, ...) for aggregation.
        """
        jobs: List[Tuple[str, str]] = []
        for p_index, post in enumerate(posts):
            post_id = post.id or f"{self.platform}-{p_index}"
            jobs.append((post_id, text_of(post)))
            for c_index, comment in enumerate(post.comments):
                jobs.append((comment.id or f"{post_id}/comment-{c_index}", comment.text))

        insights = self.analyzer.analyze_many(jobs, domain)

        analyzed: List[AnalyzedPost] = []
        cursor = 0
        for post in posts:
            post_insight = insights[cursor]
            comments = tuple(insights[cursor + 1:cursor + 1 + len(post.comments)])
            cursor += 1 + len(post.comments)
            analyzed.append(AnalyzedPost(
                source_id=post_insight.source_id,
                insight=post_insight,
                comments=comments,
            ))
        return analyzed, insights


class ForumEnricher(PlatformEnricher):
    """Forum threads (Reddit-style): title + body, plus comments."""

    platform = "reddit"

    def enrich(
        self,
        posts: Optional[Iterable[Any]],
        query: Optional[str] = None,
        domain: Union[str, Domain, None] = None,
    ) -> ForumInsights:
        """
        Args:
            posts: Raw post dicts (title, selftext, comments[{body}], ...)
            query: Search query or subreddit, used to infer the domain
            domain: Explicit domain; wins over inference

        Returns:
            ForumInsights
        """
        resolved = resolve_domain(domain) if domain is not None else self.catalog.infer_domain(query)
        records = self._records(posts, PostRecord)

        analyzed, insights = self._analyze_posts(records, resolved, lambda p: p.full_text)
        aggregated = self.aggregator.aggregate(insights)

        logger.info(
            f"Enriched {len(analyzed)} {self.platform} posts ({len(insights)} documents)",
            extra={"platform": self.platform, "domain": resolved.value, "documents": len(insights)},
        )
        return ForumInsights(
            platform=self.platform,
            domain=resolved.value,
            posts=tuple(analyzed),
            insights=aggregated,
        )


class EngagementEnricher(PlatformEnricher):
    """Short videos and image posts: caption/description plus comments, ranked by engagement."""

    platform = "tiktok"

    def enrich(
        self,
        posts: Optional[Iterable[Any]],
        domain: Union[str, Domain, None] = None,
    ) -> EngagementInsights:
        resolved = self._domain(domain)
        records = self._records(posts, PostRecord)

        analyzed, insights = self._analyze_posts(records, resolved, lambda p: p.text)
        aggregated = self.aggregator.aggregate(insights)

        stats = [
            self._engagement_stat(record, result)
            for record, result in zip(records, analyzed)
        ]
        stats.sort(key=lambda s: s.engagement, reverse=True)

        count = len(stats) or 1
        average_engagement = sum(s.engagement for s in stats) / count
        average_views = sum(s.views for s in stats) / count

        logger.info(
            f"Enriched {len(analyzed)} {self.platform} posts, "
            f"average engagement {average_engagement:.1f}",
            extra={"platform": self.platform, "domain": resolved.value, "documents": len(insights)},
        )
        return EngagementInsights(
            platform=self.platform,
            domain=resolved.value,
            posts=tuple(analyzed),
            insights=aggregated,
            engagement=tuple(stats),
            most_engaged=tuple(stats[:self.config.most_engaged_limit]),
            average_engagement=average_engagement,
            average_views=average_views,
        )

    @staticmethod
    def _engagement_stat(record: PostRecord, result: AnalyzedPost) -> EngagementStat:
        shares = record.shares or 0
        return EngagementStat(
            source_id=result.source_id,
            url=record.url,
            text=record.text,
            likes=record.likes,
            comments_count=record.comments_count,
            shares=shares,
            views=record.views,
            engagement=record.engagement,
            pain_points=len(result.insight.pain_points),
            desires=len(result.insight.desires),
        )


class ReviewEnricher(PlatformEnricher):
    """
    Product reviews and review-site entries.

    Reviews are bucketed by rating before aggregation. Desires from positive
    reviews become positive aspects, pain points from negative reviews become
    negative aspects. Terminology that names a product feature gets a
    sentiment score from how many positive vs negative reviews mention it.
    """

    platform = "amazon"
    default_domain = Domain.ECOMMERCE

    def enrich(
        self,
        reviews: Optional[Iterable[Any]],
        domain: Union[str, Domain, None] = None,
    ) -> ReviewInsights:
        resolved = self._domain(domain)
        records = self._records(reviews, ReviewRecord)

        jobs = [
            (record.id or f"{self.platform}-review-{index}", record.full_text)
            for index, record in enumerate(records)
        ]
        insights = self.analyzer.analyze_many(jobs, resolved)

        analyzed: List[AnalyzedReview] = []
        for record, insight in zip(records, insights):
            sentiment = rating_sentiment(record.rating)
            analyzed.append(AnalyzedReview(
                source_id=insight.source_id,
                rating=record.rating,
                sentiment=sentiment,
                insight=replace(insight, raw_sentiment=sentiment),
            ))

        aggregated = self.aggregator.aggregate([r.insight for r in analyzed])

        positive_aspects = [
            ReviewAspect(d.text, d.category, d.score, "desire", review.source_id)
            for review in analyzed if review.sentiment == Sentiment.POSITIVE
            for d in review.insight.desires
        ]
        negative_aspects = [
            ReviewAspect(p.text, p.category, p.score, "pain_point", review.source_id)
            for review in analyzed if review.sentiment == Sentiment.NEGATIVE
            for p in review.insight.pain_points
        ]
        positive_view = self._aspect_view(positive_aspects)
        negative_view = self._aspect_view(negative_aspects)

        features = self.product_features(aggregated, records, analyzed)
        summary = self._summary(aggregated, positive_view, negative_view, features)

        logger.info(
            f"Enriched {len(analyzed)} {self.platform} reviews: "
            f"{len(positive_aspects)} positive / {len(negative_aspects)} negative aspects, "
            f"{len(features)} features",
            extra={"platform": self.platform, "domain": resolved.value, "documents": len(analyzed)},
        )
        return ReviewInsights(
            platform=self.platform,
            domain=resolved.value,
            reviews=tuple(analyzed),
            reviews_by_sentiment={
                s.value: tuple(r.source_id for r in analyzed if r.sentiment == s)
                for s in Sentiment
            },
            insights=aggregated,
            positive_aspects=positive_view,
            negative_aspects=negative_view,
            product_features=tuple(features),
            summary=summary,
        )

    def product_features(
        self,
        aggregated: AggregatedInsights,
        records: Sequence[ReviewRecord],
        analyzed: Sequence[AnalyzedReview],
    ) -> List[FeatureSentiment]:
        """
        Feature sentiment for every distinct term naming a product feature.

        frequency = summed per-review frequency; mentions = reviews in the
        positive / negative bucket whose text contains the term as whole words.
        """
        frequencies: Dict[str, int] = {}
        for item in aggregated.terminology.all:
            if self.catalog.is_feature_term(item.term):
                frequencies[item.term] = frequencies.get(item.term, 0) + item.frequency

        texts = [
            (review.sentiment, normalize(record.full_text))
            for record, review in zip(records, analyzed)
        ]

        features = []
        for term, frequency in frequencies.items():
            positive = sum(
                1 for sentiment, text in texts
                if sentiment == Sentiment.POSITIVE and count_occurrences(text, term)
            )
            negative = sum(
                1 for sentiment, text in texts
                if sentiment == Sentiment.NEGATIVE and count_occurrences(text, term)
            )
            if positive > negative:
                label = Sentiment.POSITIVE
            elif negative > positive:
                label = Sentiment.NEGATIVE
            else:
                label = Sentiment.NEUTRAL

            features.append(FeatureSentiment(
                feature=term,
                frequency=frequency,
                positive_mentions=positive,
                negative_mentions=negative,
                sentiment=label,
                sentiment_score=feature_sentiment_score(positive, negative),
            ))

        features.sort(key=lambda f: f.frequency, reverse=True)
        return features

    def _aspect_view(self, aspects: List[ReviewAspect]) -> AspectView:
        by_category: Dict[str, List[ReviewAspect]] = {}
        for aspect in aspects:
            by_category.setdefault(aspect.category or FALLBACK_CATEGORY, []).append(aspect)
        ranked = sorted(aspects, key=lambda a: a.score, reverse=True)
        return AspectView(
            all=tuple(aspects),
            by_category={c: tuple(items) for c, items in by_category.items()},
            top=tuple(ranked[:self.config.top_aspects_limit]),
        )

    def _summary(
        self,
        aggregated: AggregatedInsights,
        positive: AspectView,
        negative: AspectView,
        features: List[FeatureSentiment],
    ) -> ReviewSummary:
        limit = self.config.summary_categories_limit

        improvement_areas: List[str] = []
        for aspect in negative.top[:IMPROVEMENT_AREAS]:
            if aspect.category not in improvement_areas:
                improvement_areas.append(aspect.category)

        return ReviewSummary(
            top_pain_point_categories=aggregated.summary.top_pain_point_categories,
            top_desire_categories=aggregated.summary.top_desire_categories,
            top_positive_categories=rank_category_names(positive.by_category, limit),
            top_negative_categories=rank_category_names(negative.by_category, limit),
            top_features=tuple(features[:TOP_FEATURES]),
            improvement_areas=tuple(improvement_areas),
            total_pain_points=aggregated.summary.totals.pain_points,
            total_desires=aggregated.summary.totals.desires,
            total_positive_aspects=len(positive.all),
            total_negative_aspects=len(negative.all),
        )
