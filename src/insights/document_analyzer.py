"""
Document Analyzer
=================

Runs the full per-document pipeline over one post, comment or review:
sentence splitting -> pain point / desire scoring -> categorisation,
plus terminology extraction over the whole text.

Each analysis is a pure function of its text and the read-only catalog,
so many documents can be analysed in parallel (analyze_many).

Usage:
    analyzer = DocumentAnalyzer()
    insight = analyzer.analyze("Ik haat het dat de foto's altijd wazig zijn.", domain="tech")
    insights = analyzer.analyze_many([("p1", text1), ("p2", text2)], domain="tech")
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, Union

from .engine_config import EngineConfig, DEFAULT_CONFIG
from .insight_models import DocumentInsight, ScoredFragment
from .signal_catalog import Domain, SignalCatalog, SignalKind, DEFAULT_CATALOG, resolve_domain
from .terminology import TerminologyExtractor
from .text_signals import Categorizer, SignalScorer, estimate_sentiment, split_sentences

logger = logging.getLogger(__name__)


class DocumentAnalyzer:
    """
    Extracts pain points, desires and terminology from one document.

    Never raises on content: invalid input or an unexpected failure
    yields an empty DocumentInsight.
    """

    def __init__(
        self,
        catalog: Optional[SignalCatalog] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.catalog = catalog or DEFAULT_CATALOG
        self.config = config or DEFAULT_CONFIG
        self.scorer = SignalScorer(self.config)
        self.categorizer = Categorizer()
        self.terminology = TerminologyExtractor(self.catalog)

    def analyze(
        self,
        text,
        domain: Union[str, Domain, None] = Domain.GENERAL,
        source_id: str = "",
    ) -> DocumentInsight:
        """
        Analyse one document.

        Args:
            text: Document text; None, non-strings and blank text give an empty insight
            domain: Terminology domain hint (unknown values fall back to general)
            source_id: Identifier carried into the result

        Returns:
            DocumentInsight
        """
        if not isinstance(text, str) or not text.strip():
            return DocumentInsight(source_id=source_id)

        try:
            sentences = split_sentences(text)
            return DocumentInsight(
                source_id=source_id,
                pain_points=tuple(self._fragments(sentences, SignalKind.PAIN_POINT)),
                desires=tuple(self._fragments(sentences, SignalKind.DESIRE)),
                terminology=tuple(self.terminology.extract(text, resolve_domain(domain))),
                raw_sentiment=estimate_sentiment(text, self.catalog),
            )
        except Exception as e:
            logger.error(f"Analysis failed for document '{source_id}': {e}", extra={"source_id": source_id})
            return DocumentInsight(source_id=source_id)

    def _fragments(self, sentences: List[str], kind: SignalKind) -> List[ScoredFragment]:
        table = self.catalog.indicators(kind)
        rules = self.catalog.categories(kind)
        fragments = []

        for sentence in sentences:
            score, matched = self.scorer.score(sentence, table)
            if not self.scorer.qualifies(matched):
                continue
            fragments.append(ScoredFragment(
                text=sentence,
                score=score,
                indicators=tuple(matched),
                category=self.categorizer.categorize(sentence, rules),
            ))

        return fragments

    def analyze_many(
        self,
        documents: Sequence[Tuple[str, str]],
        domain: Union[str, Domain, None] = Domain.GENERAL,
        max_workers: Optional[int] = None,
    ) -> List[DocumentInsight]:
        """
        Analyse (source_id, text) pairs, fanning out over worker threads.

        Results come back in input order.
        """
        if not documents:
            return []

        workers = max_workers or self.config.max_workers
        resolved = resolve_domain(domain)

        if workers <= 1 or len(documents) == 1:
            return [self.analyze(text, resolved, source_id) for source_id, text in documents]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(
                lambda doc: self.analyze(doc[1], resolved, doc[0]),
                documents,
            ))
