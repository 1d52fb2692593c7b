"""
Terminology Extractor
=====================

Extracts domain terms (1-3 word n-grams) with whole-word frequency and a
context sentence from a single document.

Steps:
1. Lowercase, replace punctuation by spaces, keep words longer than 2 chars
2. Build every contiguous 1-, 2- and 3-gram over that token stream
3. Keep n-grams containing a word of the domain vocabulary
   (general domain: keep everything; unknown domain: general)
4. Count whole-word occurrences and pick the first original sentence
   containing the term
5. Sort by frequency descending (stable: ties keep first-seen order)

Overlapping n-grams ("battery", "battery life") are distinct terms.
"""

import re
import logging
from typing import FrozenSet, List, Optional, Union

from .insight_models import TerminologyItem
from .signal_catalog import Domain, SignalCatalog, DEFAULT_CATALOG
from .text_signals import split_sentences

logger = logging.getLogger(__name__)

PUNCTUATION = re.compile(r"[^\w\s]")
MIN_WORD_LENGTH = 3
MAX_NGRAM = 3


def tokenize(text: str) -> List[str]:
    """Lowercased words of at least MIN_WORD_LENGTH characters, punctuation stripped."""
    cleaned = PUNCTUATION.sub(" ", text.lower())
    return [w for w in cleaned.split() if len(w) >= MIN_WORD_LENGTH]


def normalize(text: str) -> str:
    """Token stream joined by single spaces; the text terms are counted in."""
    return " ".join(tokenize(text))


def build_ngrams(tokens: List[str], max_n: int = MAX_NGRAM) -> List[str]:
    """Unigram, bigram, trigram at each position, in token order."""
    ngrams = []
    for i in range(len(tokens)):
        for n in range(1, max_n + 1):
            if i + n <= len(tokens):
                ngrams.append(" ".join(tokens[i:i + n]))
    return ngrams


def count_occurrences(normalized_text: str, term: str) -> int:
    """Whole-word occurrences of term; 'cat' never matches inside 'category'."""
    if not term:
        return 0
    pattern = re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)
    return len(pattern.findall(normalized_text))


class TerminologyExtractor:
    """Domain-scoped n-gram extractor."""

    def __init__(self, catalog: Optional[SignalCatalog] = None):
        self.catalog = catalog or DEFAULT_CATALOG

    def extract(self, text, domain: Union[str, Domain, None] = Domain.GENERAL) -> List[TerminologyItem]:
        """
        Extract terminology from one document.

        Args:
            text: Original document text (non-strings yield [])
            domain: Vocabulary to filter against

        Returns:
            List of TerminologyItem, one per distinct term, by frequency desc.
        """
        if not isinstance(text, str) or not text.strip():
            return []

        tokens = tokenize(text)
        if not tokens:
            return []

        vocabulary = self.catalog.vocabulary(domain)
        normalized = " ".join(tokens)
        sentences = split_sentences(text)
        normalized_sentences = [normalize(s) for s in sentences]

        seen = set()
        terms: List[TerminologyItem] = []
        for ngram in build_ngrams(tokens):
            if ngram in seen or not self._in_vocabulary(ngram, vocabulary):
                continue
            seen.add(ngram)
            terms.append(TerminologyItem(
                term=ngram,
                frequency=count_occurrences(normalized, ngram),
                context=self._context(ngram, sentences, normalized_sentences),
            ))

        terms.sort(key=lambda t: t.frequency, reverse=True)
        return terms

    @staticmethod
    def _in_vocabulary(ngram: str, vocabulary: Optional[FrozenSet[str]]) -> bool:
        if vocabulary is None:
            return True
        return any(word in vocabulary for word in ngram.split())

    @staticmethod
    def _context(term: str, sentences: List[str], normalized_sentences: List[str]) -> str:
        for original, normalized in zip(sentences, normalized_sentences):
            if count_occurrences(normalized, term):
                return original
        # n-grams can straddle a sentence boundary
        head = term.split()[0]
        for original, normalized in zip(sentences, normalized_sentences):
            if count_occurrences(normalized, head):
                return original
        return ""
