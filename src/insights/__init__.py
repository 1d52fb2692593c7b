"""
Insight Extraction & Aggregation Engine
=======================================

Deterministic extraction of pain points, desires and domain terminology
from forum posts, short-video and image-post comments and product reviews,
rolled up into ranked cross-document summaries. No ML required.

Modules:
    signal_catalog       Indicator / category / vocabulary tables (read-only)
    text_signals         Sentence splitting, weighted scoring, categorisation
    terminology          Domain n-gram extraction
    document_analyzer    Per-document pipeline (+ parallel fan-out)
    insight_aggregator   Cross-document grouping, ranking, summary
    enrichers            Forum, engagement and review orchestration
    source_models        Pydantic models for raw fetched records
    insight_models       Immutable result records
"""

from .engine_config import EngineConfig, DEFAULT_CONFIG
from .signal_catalog import SignalCatalog, SignalKind, Domain, DEFAULT_CATALOG
from .insight_models import DocumentInsight, AggregatedInsights, Sentiment
from .document_analyzer import DocumentAnalyzer
from .insight_aggregator import InsightAggregator
from .enrichers import ForumEnricher, EngagementEnricher, ReviewEnricher
