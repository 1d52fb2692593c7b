"""
Text Signal Primitives (Deterministic)
======================================

Sentence splitting, weighted indicator scoring, first-match categorisation
and a word-count sentiment estimate. No ML: fast, explainable, reproducible.

Usage:
    scorer = SignalScorer()
    for sentence in split_sentences(text):
        score, matched = scorer.score(sentence, catalog.indicators(SignalKind.PAIN_POINT))
        if scorer.qualifies(matched):
            category = Categorizer().categorize(sentence, catalog.categories(SignalKind.PAIN_POINT))
"""

import re
import logging
from typing import List, Optional, Sequence, Tuple

from .engine_config import EngineConfig, DEFAULT_CONFIG
from .insight_models import MatchedIndicator, Sentiment
from .signal_catalog import (
    CategoryRule,
    FALLBACK_CATEGORY,
    Indicator,
    SignalCatalog,
    DEFAULT_CATALOG,
)

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
WORD_SPLIT = re.compile(r"\W+")

# Lexicon sentiment: net share of sentiment words needed for a non-neutral label
SENTIMENT_MARGIN = 0.05


def split_sentences(text) -> List[str]:
    """
    Split text on sentence-terminal punctuation.

    Fragments are trimmed, empty ones dropped, source order kept.
    Anything that is not a non-empty string yields [].
    """
    if not isinstance(text, str) or not text.strip():
        return []
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


class SignalScorer:
    """
    Scores a sentence against a weighted indicator table.

    Every matching indicator adds its weight; the reported score is capped,
    so several weak indicators compound but never exceed the cap.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def score(
        self,
        sentence: str,
        table: Sequence[Indicator],
    ) -> Tuple[float, List[MatchedIndicator]]:
        """
        Returns:
            (capped score, matched indicators in table order)
        """
        matched = [
            MatchedIndicator(indicator_label=ind.label, weight=ind.weight)
            for ind in table
            if ind.matches(sentence)
        ]
        return min(self.accumulated(matched), self.config.score_cap), matched

    @staticmethod
    def accumulated(matched: Sequence[MatchedIndicator]) -> float:
        return sum(m.weight for m in matched)

    def qualifies(self, matched: Sequence[MatchedIndicator]) -> bool:
        """True if the uncapped weight sum is strictly above the threshold."""
        if not matched:
            return False
        return self.accumulated(matched) > self.config.qualification_threshold


class Categorizer:
    """First-match categoriser over an ordered rule table."""

    def __init__(self, fallback: str = FALLBACK_CATEGORY):
        self.fallback = fallback

    def categorize(self, text: str, rules: Sequence[CategoryRule]) -> str:
        for rule in rules:
            if rule.matches(text):
                return rule.name
        return self.fallback


def estimate_sentiment(text, catalog: SignalCatalog = DEFAULT_CATALOG) -> Optional[Sentiment]:
    """
    Word-count sentiment: (positive words - negative words) / total words.

    Returns None for empty or non-string input.
    """
    if not isinstance(text, str):
        return None
    words = [w for w in WORD_SPLIT.split(text.lower()) if w]
    if not words:
        return None

    positive = sum(1 for w in words if w in catalog.positive_words)
    negative = sum(1 for w in words if w in catalog.negative_words)
    score = (positive - negative) / len(words)

    if score > SENTIMENT_MARGIN:
        return Sentiment.POSITIVE
    if score < -SENTIMENT_MARGIN:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL
