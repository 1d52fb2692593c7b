#!/usr/bin/env python3
"""
Offline insight validation: mock forum threads, videos and reviews → enrichers.
No scraping, no database. Exercises the full extraction + aggregation chain.
"""
import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from src.insights.enrichers import ForumEnricher, EngagementEnricher, ReviewEnricher
from src.insights.logging_config import setup_logging

logger = logging.getLogger("run_insights_offline")


MOCK_THREADS = [
    {
        "id": "t3_a1",
        "title": "Best smartphone for travel?",
        "selftext": "I want a phone with a camera that is not blurry at night. "
                    "My current one has a terrible battery and it is so frustrating.",
        "score": 42,
        "num_comments": 2,
        "comments": [
            {"id": "c1", "body": "I hate how slow the app updates are on my laptop."},
            {"id": "c2", "body": "Looking for a laptop with a battery that would last a whole day."},
        ],
    },
    {
        "id": "t3_a2",
        "title": "Software that actually works",
        "selftext": "Ik zou graag een app willen die niet steeds crasht. Het probleem is de interface.",
        "score": "17",
        "num_comments": None,
    },
]

MOCK_VIDEOS = [
    {
        "id": "v1",
        "url": "https://example.com/v1",
        "description": "Ik haat het dat de foto's altijd wazig zijn.",
        "like_count": 1200,
        "comment_count": 45,
        "share_count": 30,
        "play_count": 40000,
        "comments": [{"text": "Zelfde probleem, super frustrerend"}],
    },
    {
        "id": "v2",
        "url": "https://example.com/v2",
        "caption": "Ik zou graag een telefoon willen die minstens een hele dag meegaat.",
        "likes": 300,
        "comments_count": 12,
        "views": 9000,
    },
]

MOCK_REVIEWS = [
    {"review_id": "r1", "title": "Love it", "content": "Fantastic battery life, I wish the price was lower", "rating": "5.0 out of 5 stars"},
    {"review_id": "r2", "title": "Broken", "content": "The battery life is terrible and the quality is poor", "rating": 1},
    {"review_id": "r3", "title": "Okay", "content": "Decent product, shipping was slow", "rating": "3"},
]


def main():
    parser = argparse.ArgumentParser(description="Run the insight engine on mock data")
    parser.add_argument("--json-logs", action="store_true", help="JSON structured log output")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    setup_logging(level=args.log_level, json_output=args.json_logs)

    # Step 1: forum threads
    forum = ForumEnricher().enrich(MOCK_THREADS, query="smartphone")
    summary = forum.insights.summary
    logger.info(f"[1] FORUM domain={forum.domain} posts={len(forum.posts)}")
    logger.info(f"    pain point categories: {list(summary.top_pain_point_categories)}")
    logger.info(f"    desire categories:     {list(summary.top_desire_categories)}")
    logger.info(f"    top terms:             {list(summary.top_terms)}")

    # Step 2: short videos
    videos = EngagementEnricher(platform="tiktok").enrich(MOCK_VIDEOS, domain="tech")
    logger.info(f"[2] VIDEOS average engagement={videos.average_engagement:.1f} "
                f"average views={videos.average_views:.1f}")
    for stat in videos.most_engaged:
        logger.info(f"    {stat.source_id}: engagement={stat.engagement} "
                    f"pain_points={stat.pain_points} desires={stat.desires}")

    # Step 3: product reviews
    reviews = ReviewEnricher(platform="amazon").enrich(MOCK_REVIEWS)
    buckets = {k: len(v) for k, v in reviews.reviews_by_sentiment.items()}
    logger.info(f"[3] REVIEWS buckets={buckets}")
    for feature in reviews.summary.top_features:
        logger.info(f"    {feature.feature}: +{feature.positive_mentions} "
                    f"-{feature.negative_mentions} score={feature.sentiment_score:+.2f}")
    logger.info(f"    improvement areas: {list(reviews.summary.improvement_areas)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
