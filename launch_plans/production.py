"""Launch plans for production domain.

Only define launch plans here that should run on a schedule in production.
CI/CD registers this file to the production domain on push to main.

Current schedules:
- Post Sentiment: Daily at 06:00 UTC (full post table, 10 shards)
"""

from flytekit import CronSchedule, LaunchPlan

from src.shared.config import MAX_LENGTH, SENTIMENT_MODEL_DIR, SHARD_COUNT
from src.wf_post_sentiment.workflow import post_sentiment_workflow

post_sentiment_prod_daily = LaunchPlan.get_or_create(
    name="post_sentiment_prod_daily",
    workflow=post_sentiment_workflow,
    default_inputs={
        "input_path": "s3://post-sentiment/posts/test.csv",
        "output_path": "s3://post-sentiment/results/results.csv",
        "shard_count": SHARD_COUNT,
        "max_length": MAX_LENGTH,
        "model_dir": SENTIMENT_MODEL_DIR,
    },
    schedule=CronSchedule(schedule="0 6 * * *"),
)
