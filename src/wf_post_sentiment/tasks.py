"""Post Sentiment Classification - Tasks.

Batch pipeline that reads a table of community posts, classifies every
post as long/neutral/short with the Korean BERT sentiment model (ONNX,
CPU), and writes the augmented table.

Node: Any worker with >= 2 GiB memory (model + 10 shard threads)

Task chain:
    load_posts
        │
    classify_posts           ← shard fan-out/fan-in inside one pod
        │
      ┌─┴────────────┐
      │              │
  export_results  generate_sentiment_report   ← PARALLEL

Important Flytekit constraints:
- List[Dataclass] is OK if the dataclass has only primitive fields
- Lazy imports inside task functions
- Max limits=Resources(cpu="1000m") per platform constraint
"""

from typing import List

from flytekit import task, Resources

from src.shared.logging_config import configure_logging
from src.shared.models import ClassifiedPost, Post

configure_logging()


@task(
    requests=Resources(cpu="200m", mem="256Mi"),
    limits=Resources(cpu="500m", mem="512Mi"),
)
def load_posts(input_path: str) -> List[Post]:
    """Read the full input table (post_num, time, text).

    Args:
        input_path: Local CSV path or s3://bucket/key URI.

    Returns:
        Posts in source order, row_index set to their position.

    Raises:
        InputDataError: missing/malformed table. Aborts the run.
    """
    from src.shared.storage import read_posts

    return read_posts(input_path)


@task(
    requests=Resources(cpu="1000m", mem="2048Mi"),
    limits=Resources(cpu="1000m", mem="3072Mi"),
)
def classify_posts(
    posts: List[Post],
    shard_count: int,
    max_length: int,
    model_dir: str,
) -> List[ClassifiedPost]:
    """Classify all posts with one worker thread per shard.

    Loads the model context once; every shard worker shares it.
    Posts that fail to encode or classify come back as sentinel rows
    (sentiment="error") instead of failing the task.

    Args:
        posts: Output of load_posts.
        shard_count: Number of contiguous shards / concurrent workers.
        max_length: Fixed token sequence length.
        model_dir: Directory with vocab.txt and the ONNX model.

    Returns:
        One ClassifiedPost per input post.
    """
    from src.shared.config import RESTORE_INPUT_ORDER, SHARD_TIMEOUT_SECONDS
    from src.shared.pipeline import RowClassifier, load_model_context
    from src.shared.scheduler import ShardScheduler

    context = load_model_context(model_dir=model_dir, max_length=max_length)
    scheduler = ShardScheduler(
        RowClassifier(context),
        shard_count=shard_count,
        shard_timeout=SHARD_TIMEOUT_SECONDS,
        restore_order=RESTORE_INPUT_ORDER,
    )
    return scheduler.run(posts)


@task(
    requests=Resources(cpu="200m", mem="256Mi"),
    limits=Resources(cpu="500m", mem="512Mi"),
)
def export_results(results: List[ClassifiedPost], output_path: str) -> str:
    """Write the output table (and error sidecar) to disk or MinIO.

    A failed write is reported in the returned summary and the log;
    it does not fail the workflow, the classified rows stay in Flyte's
    task outputs.

    Returns:
        Summary string with paths and row counts.
    """
    from src.shared.exceptions import OutputWriteError
    from src.shared.storage import write_results

    try:
        return write_results(results, output_path)
    except OutputWriteError as exc:
        return f"Write failed: {exc.message}"


@task(
    requests=Resources(cpu="100m", mem="128Mi"),
    limits=Resources(cpu="200m", mem="256Mi"),
)
def generate_sentiment_report(results: List[ClassifiedPost]) -> str:
    """Generate a text summary of the classification run.

    Reports:
    - Posts classified vs failed
    - Label distribution
    - Mean class probabilities
    - Long/short ratio

    Returns:
        Formatted text report.
    """
    from src.shared.analytics import build_sentiment_report

    return build_sentiment_report(results)
