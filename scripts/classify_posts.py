#!/usr/bin/env python3
"""Classify a post table locally, without a Flyte cluster.

Runs to completion with the settings from src/shared/config.py
(override via env vars: INPUT_PATH, OUTPUT_PATH, SENTIMENT_MODEL_DIR,
SHARD_COUNT, MAX_LENGTH, SHARD_TIMEOUT_SECONDS).

Usage:
    python scripts/classify_posts.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import structlog

from src.shared.analytics import build_sentiment_report
from src.shared.config import INPUT_PATH, MAX_LENGTH, OUTPUT_PATH, SENTIMENT_MODEL_DIR, SHARD_COUNT
from src.shared.exceptions import OutputWriteError, SentimentPipelineError
from src.shared.logging_config import configure_logging
from src.shared.pipeline import RowClassifier, load_model_context
from src.shared.scheduler import ShardScheduler
from src.shared.storage import read_posts, write_results

logger = structlog.get_logger("classify_posts")


def main() -> int:
    configure_logging()
    try:
        posts = read_posts(INPUT_PATH)
        context = load_model_context(model_dir=SENTIMENT_MODEL_DIR, max_length=MAX_LENGTH)
        results = ShardScheduler(RowClassifier(context), shard_count=SHARD_COUNT).run(posts)
    except SentimentPipelineError as exc:
        logger.error("run_aborted", error=exc.message, **exc.details)
        return 1

    print("Saving results...")
    exit_code = 0
    try:
        print(write_results(results, OUTPUT_PATH))
    except OutputWriteError as exc:
        print(f"Write failed: {exc.message}")
        exit_code = 2

    print(build_sentiment_report(results))
    print("All done!")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
