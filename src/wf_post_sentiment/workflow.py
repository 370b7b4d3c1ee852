"""Post Sentiment Classification - Workflow.

Reads a post table, classifies every post as long/neutral/short and
writes the augmented table.

Pipeline:
    load_posts -> classify_posts -> ┬─ export_results
                                    └─ generate_sentiment_report  ← PARALLEL

Example local run:
    pyflyte run src/wf_post_sentiment/workflow.py post_sentiment_workflow \\
        --input_path test.csv --output_path results.csv
"""

from flytekit import workflow

from src.shared.config import (
    INPUT_PATH,
    OUTPUT_PATH,
    SHARD_COUNT,
    MAX_LENGTH,
    SENTIMENT_MODEL_DIR,
)
from src.wf_post_sentiment.tasks import (
    load_posts,
    classify_posts,
    export_results,
    generate_sentiment_report,
)


@workflow
def post_sentiment_workflow(
    input_path: str = INPUT_PATH,
    output_path: str = OUTPUT_PATH,
    shard_count: int = SHARD_COUNT,
    max_length: int = MAX_LENGTH,
    model_dir: str = SENTIMENT_MODEL_DIR,
) -> str:
    """Batch sentiment classification of community posts.

    Args:
        input_path: CSV with post_num, time, text (local or s3://).
        output_path: Destination CSV (local or s3://).
        shard_count: Number of concurrent shard workers (default: 10).
        max_length: Token sequence length (default: 128).
        model_dir: Directory with vocab.txt and the ONNX model.

    Returns:
        Sentiment report as formatted text.
    """
    posts = load_posts(input_path=input_path)
    results = classify_posts(
        posts=posts,
        shard_count=shard_count,
        max_length=max_length,
        model_dir=model_dir,
    )

    # Export and report run in parallel
    export_summary = export_results(results=results, output_path=output_path)
    report = generate_sentiment_report(results=results)
    return report
