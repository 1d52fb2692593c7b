"""
Insight Aggregator
==================

Rolls many DocumentInsights (posts, comments, reviews) up into one
AggregatedInsights: fragments grouped by category, terminology grouped by
frequency, ranked top-N views and a summary.

Aggregation is a barrier: it needs every per-document result before ranking.
A document that cannot be read is logged and skipped; the rest still
aggregate.

Usage:
    aggregator = InsightAggregator()
    result = aggregator.aggregate(insights)
    result.summary.top_pain_point_categories
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .engine_config import EngineConfig, DEFAULT_CONFIG
from .insight_models import (
    AggregatedInsights,
    CategoryTop,
    DocumentInsight,
    ScoredFragment,
    Sentiment,
    SignalView,
    Summary,
    TerminologyItem,
    TerminologyView,
    Totals,
)
from .signal_catalog import FALLBACK_CATEGORY

logger = logging.getLogger(__name__)

Contribution = Tuple[List[ScoredFragment], List[ScoredFragment], List[TerminologyItem], Optional[Sentiment]]


def group_by_category(fragments: Sequence[ScoredFragment]) -> Dict[str, List[ScoredFragment]]:
    """Bucket fragments by category; buckets and their items keep encounter order."""
    buckets: Dict[str, List[ScoredFragment]] = {}
    for fragment in fragments:
        buckets.setdefault(fragment.category or FALLBACK_CATEGORY, []).append(fragment)
    return buckets


def group_terminology_by_frequency(items: Sequence[TerminologyItem]) -> Dict[int, List[TerminologyItem]]:
    """Group terms by their raw frequency value (a grouping, not a ranking)."""
    groups: Dict[int, List[TerminologyItem]] = {}
    for item in items:
        groups.setdefault(item.frequency or 1, []).append(item)
    return groups


def rank_terminology(by_frequency: Dict[int, List[TerminologyItem]]) -> List[TerminologyItem]:
    """Flatten frequency groups and sort by frequency descending (stable)."""
    flat = [item for group in by_frequency.values() for item in group]
    flat.sort(key=lambda t: t.frequency, reverse=True)
    return flat


def rank_category_names(bucket: Dict[str, Sequence], limit: int) -> Tuple[str, ...]:
    """Category names by bucket size, descending; ties keep first-seen order."""
    ranked = sorted(bucket.items(), key=lambda kv: len(kv[1]), reverse=True)
    return tuple(category for category, _ in ranked[:limit])


def top_categories(
    bucket: Dict[str, Sequence[ScoredFragment]],
    limit: int,
    representative_items: int = 3,
) -> Tuple[CategoryTop, ...]:
    """
    Categories by fragment count, descending.

    Ties keep first-seen category order, so repeated calls on the same bucket
    return the same ranking.
    """
    ranked = sorted(bucket.items(), key=lambda kv: len(kv[1]), reverse=True)
    return tuple(
        CategoryTop(
            category=category,
            count=len(items),
            items=tuple(items[:representative_items]),
        )
        for category, items in ranked[:limit]
    )


class InsightAggregator:
    """
    Aggregates per-document insights into cross-document rankings.

    Every call builds a fresh result; nothing is cached between calls.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def aggregate(self, insights: Optional[Sequence[DocumentInsight]]) -> AggregatedInsights:
        """
        Aggregate document insights (comments included as separate documents).

        Args:
            insights: DocumentInsights in encounter order

        Returns:
            AggregatedInsights
        """
        all_pain_points: List[ScoredFragment] = []
        all_desires: List[ScoredFragment] = []
        all_terminology: List[TerminologyItem] = []
        sentiment_breakdown = {s.value: 0 for s in Sentiment}
        analyzed = 0
        skipped = 0

        for index, insight in enumerate(insights or ()):
            try:
                pain_points, desires, terminology, sentiment = self._contribution(insight)
            except Exception as e:
                skipped += 1
                logger.warning(
                    f"Skipping document #{index} during aggregation: {e}",
                    extra={"stage": "aggregate"},
                )
                continue

            all_pain_points.extend(pain_points)
            all_desires.extend(desires)
            all_terminology.extend(terminology)
            if sentiment is not None:
                sentiment_breakdown[sentiment.value] += 1
            analyzed += 1

        pain_by_category = group_by_category(all_pain_points)
        desire_by_category = group_by_category(all_desires)
        terminology_by_frequency = group_terminology_by_frequency(all_terminology)
        ranked_terms = rank_terminology(terminology_by_frequency)

        summary = Summary(
            top_pain_point_categories=self._category_names(pain_by_category),
            top_desire_categories=self._category_names(desire_by_category),
            top_terms=self._distinct_terms(ranked_terms),
            totals=Totals(
                pain_points=len(all_pain_points),
                desires=len(all_desires),
                terms=len(all_terminology),
            ),
            documents_analyzed=analyzed,
            documents_skipped=skipped,
            sentiment_breakdown=sentiment_breakdown,
        )

        logger.info(
            f"Aggregated {analyzed} documents ({skipped} skipped): "
            f"{len(all_pain_points)} pain points, {len(all_desires)} desires, "
            f"{len(all_terminology)} terms",
            extra={"stage": "aggregate", "documents": analyzed},
        )

        return AggregatedInsights(
            pain_points=self._signal_view(all_pain_points, pain_by_category),
            desires=self._signal_view(all_desires, desire_by_category),
            terminology=TerminologyView(
                all=tuple(all_terminology),
                by_frequency={f: tuple(items) for f, items in terminology_by_frequency.items()},
                top=tuple(ranked_terms[:self.config.top_terms_limit]),
            ),
            summary=summary,
        )

    def top_categories(self, bucket: Dict[str, Sequence[ScoredFragment]], limit: Optional[int] = None) -> Tuple[CategoryTop, ...]:
        return top_categories(
            bucket,
            limit or self.config.top_categories_limit,
            self.config.representative_items,
        )

    @staticmethod
    def _contribution(insight: DocumentInsight) -> Contribution:
        """Read one document completely; raises if any part is malformed."""
        if not isinstance(insight, DocumentInsight):
            raise TypeError(f"expected DocumentInsight, got {type(insight).__name__}")

        pain_points = list(insight.pain_points)
        desires = list(insight.desires)
        terminology = list(insight.terminology)

        for fragment in pain_points + desires:
            if not isinstance(fragment, ScoredFragment):
                raise TypeError(f"expected ScoredFragment, got {type(fragment).__name__}")
        for item in terminology:
            if not isinstance(item, TerminologyItem):
                raise TypeError(f"expected TerminologyItem, got {type(item).__name__}")

        sentiment = None
        if insight.raw_sentiment is not None:
            sentiment = Sentiment(insight.raw_sentiment)

        return pain_points, desires, terminology, sentiment

    def _signal_view(
        self,
        fragments: List[ScoredFragment],
        by_category: Dict[str, List[ScoredFragment]],
    ) -> SignalView:
        return SignalView(
            all=tuple(fragments),
            by_category={c: tuple(items) for c, items in by_category.items()},
            top_categories=self.top_categories(by_category),
        )

    def _category_names(self, by_category: Dict[str, List[ScoredFragment]]) -> Tuple[str, ...]:
        return rank_category_names(by_category, self.config.summary_categories_limit)

    def _distinct_terms(self, ranked: List[TerminologyItem]) -> Tuple[str, ...]:
        terms: List[str] = []
        for item in ranked:
            if item.term not in terms:
                terms.append(item.term)
            if len(terms) >= self.config.summary_terms_limit:
                break
        return tuple(terms)
