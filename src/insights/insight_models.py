"""
Insight Data Models
===================

Structured outputs of the extraction and aggregation pipeline.
All records are frozen and built from tuples, dicts and primitives only,
so they can be handed to persistence or rendering layers as-is
(`to_dict()` gives a JSON-ready tree).
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Sentiment(str, Enum):
    """Coarse document sentiment."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


def _plain(value: Any) -> Any:
    """Convert enums nested in asdict() output to their values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


# =============================================================================
# PER-DOCUMENT RECORDS
# =============================================================================

@dataclass(frozen=True)
class MatchedIndicator:
    """One indicator pattern that matched a sentence."""
    indicator_label: str
    weight: float


@dataclass(frozen=True)
class ScoredFragment(_Serializable):
    """A sentence that qualified as a pain point or desire."""
    text: str
    score: float                              # 0.0 to 1.0 (capped sum of weights)
    indicators: Tuple[MatchedIndicator, ...]
    category: str


@dataclass(frozen=True)
class TerminologyItem(_Serializable):
    """A domain term (1-3 word n-gram) found in one document."""
    term: str
    frequency: int      # whole-word occurrences in the document
    context: str        # first original sentence containing the term


@dataclass(frozen=True)
class DocumentInsight(_Serializable):
    """Signals extracted from a single post, comment or review."""
    source_id: str
    pain_points: Tuple[ScoredFragment, ...] = ()
    desires: Tuple[ScoredFragment, ...] = ()
    terminology: Tuple[TerminologyItem, ...] = ()
    raw_sentiment: Optional[Sentiment] = None

    @property
    def is_empty(self) -> bool:
        return not (self.pain_points or self.desires or self.terminology)


# =============================================================================
# AGGREGATED RECORDS
# =============================================================================

@dataclass(frozen=True)
class CategoryTop(_Serializable):
    """A category ranked by how many fragments fell into it."""
    category: str
    count: int
    items: Tuple[ScoredFragment, ...]   # representative fragments, encounter order


@dataclass(frozen=True)
class SignalView(_Serializable):
    """All fragments of one signal kind, grouped and ranked."""
    all: Tuple[ScoredFragment, ...] = ()
    by_category: Dict[str, Tuple[ScoredFragment, ...]] = field(default_factory=dict)
    top_categories: Tuple[CategoryTop, ...] = ()


@dataclass(frozen=True)
class TerminologyView(_Serializable):
    """Terminology grouped by raw frequency plus a global ranking."""
    all: Tuple[TerminologyItem, ...] = ()
    by_frequency: Dict[int, Tuple[TerminologyItem, ...]] = field(default_factory=dict)
    top: Tuple[TerminologyItem, ...] = ()


@dataclass(frozen=True)
class Totals:
    pain_points: int = 0
    desires: int = 0
    terms: int = 0


@dataclass(frozen=True)
class Summary(_Serializable):
    """Headline view of one aggregation pass."""
    top_pain_point_categories: Tuple[str, ...] = ()
    top_desire_categories: Tuple[str, ...] = ()
    top_terms: Tuple[str, ...] = ()
    totals: Totals = field(default_factory=Totals)
    documents_analyzed: int = 0
    documents_skipped: int = 0
    sentiment_breakdown: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregatedInsights(_Serializable):
    """Cross-document result of one aggregation pass."""
    pain_points: SignalView = field(default_factory=SignalView)
    desires: SignalView = field(default_factory=SignalView)
    terminology: TerminologyView = field(default_factory=TerminologyView)
    summary: Summary = field(default_factory=Summary)


# =============================================================================
# FORUM / SOCIAL ENRICHMENT
# =============================================================================

@dataclass(frozen=True)
class AnalyzedPost(_Serializable):
    """A post (or video) with the insights of its text and its comments."""
    source_id: str
    insight: DocumentInsight
    comments: Tuple[DocumentInsight, ...] = ()


@dataclass(frozen=True)
class EngagementStat(_Serializable):
    """Engagement figures for one post or video."""
    source_id: str
    url: Optional[str]
    text: str
    likes: int
    comments_count: int
    shares: int
    views: int
    engagement: int     # likes + comments_count + shares
    pain_points: int
    desires: int


@dataclass(frozen=True)
class ForumInsights(_Serializable):
    """Enriched forum thread collection (Reddit-style)."""
    platform: str
    domain: str
    posts: Tuple[AnalyzedPost, ...]
    insights: AggregatedInsights


@dataclass(frozen=True)
class EngagementInsights(_Serializable):
    """Enriched short-video or image-post collection."""
    platform: str
    domain: str
    posts: Tuple[AnalyzedPost, ...]
    insights: AggregatedInsights
    engagement: Tuple[EngagementStat, ...]      # sorted by engagement, descending
    most_engaged: Tuple[EngagementStat, ...]
    average_engagement: float
    average_views: float


# =============================================================================
# REVIEW ENRICHMENT
# =============================================================================

@dataclass(frozen=True)
class AnalyzedReview(_Serializable):
    """A review with its rating bucket and extracted insight."""
    source_id: str
    rating: float
    sentiment: Sentiment
    insight: DocumentInsight


@dataclass(frozen=True)
class ReviewAspect(_Serializable):
    """A desire from a positive review or a pain point from a negative one."""
    aspect: str
    category: str
    score: float
    source: str         # "desire" or "pain_point"
    review_id: str


@dataclass(frozen=True)
class AspectView(_Serializable):
    all: Tuple[ReviewAspect, ...] = ()
    by_category: Dict[str, Tuple[ReviewAspect, ...]] = field(default_factory=dict)
    top: Tuple[ReviewAspect, ...] = ()


@dataclass(frozen=True)
class FeatureSentiment(_Serializable):
    """How positive and negative reviews talk about one product feature."""
    feature: str
    frequency: int
    positive_mentions: int
    negative_mentions: int
    sentiment: Sentiment
    sentiment_score: float      # (pos - neg) / (pos + neg), denominator at least 1


@dataclass(frozen=True)
class ReviewSummary(_Serializable):
    """Headline view of a review collection."""
    top_pain_point_categories: Tuple[str, ...] = ()
    top_desire_categories: Tuple[str, ...] = ()
    top_positive_categories: Tuple[str, ...] = ()
    top_negative_categories: Tuple[str, ...] = ()
    top_features: Tuple[FeatureSentiment, ...] = ()
    improvement_areas: Tuple[str, ...] = ()
    total_pain_points: int = 0
    total_desires: int = 0
    total_positive_aspects: int = 0
    total_negative_aspects: int = 0


@dataclass(frozen=True)
class ReviewInsights(_Serializable):
    """Enriched review collection for one product or company."""
    platform: str
    domain: str
    reviews: Tuple[AnalyzedReview, ...]
    reviews_by_sentiment: Dict[str, Tuple[str, ...]]    # bucket -> review ids
    insights: AggregatedInsights
    positive_aspects: AspectView
    negative_aspects: AspectView
    product_features: Tuple[FeatureSentiment, ...]
    summary: ReviewSummary

    def feature(self, term: str) -> Optional[FeatureSentiment]:
        for feature in self.product_features:
            if feature.feature == term:
                return feature
        return None
