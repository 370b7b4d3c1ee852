"""Launch plans for development domain.

Development schedules run more frequently with fewer shards
for fast iteration and testing.
"""

from flytekit import CronSchedule, LaunchPlan

from src.wf_post_sentiment.workflow import post_sentiment_workflow

# Post sentiment - every 6 hours in DEV (2 shards, sample table)
post_sentiment_dev_schedule = LaunchPlan.get_or_create(
    name="post_sentiment_dev_6h",
    workflow=post_sentiment_workflow,
    default_inputs={
        "input_path": "s3://post-sentiment/dev/test.csv",
        "output_path": "s3://post-sentiment/dev/results.csv",
        "shard_count": 2,
    },
    schedule=CronSchedule(schedule="0 */6 * * *"),
)
