"""CSV storage helpers for Post Sentiment Workflows.

Reads the input table (post_num, time, text) and writes the output table
(post_num, time, text, long, neutral, short, sentiment). Paths are local
files or s3://bucket/key URIs on MinIO.

Uses pandas for CSV parsing/serialization and boto3 for S3 operations.
Lazy imports to avoid issues in test environments without S3 access.
"""

import io
import os
from typing import List, Optional, Tuple

import structlog

from src.shared.config import (
    ERROR_COLUMNS,
    INPUT_COLUMNS,
    MINIO_ACCESS_KEY,
    MINIO_ENDPOINT,
    MINIO_SECRET_KEY,
    OUTPUT_COLUMNS,
    SCORE_DECIMALS,
)
from src.shared.exceptions import InputDataError, OutputWriteError
from src.shared.models import ClassifiedPost, Post

logger = structlog.get_logger(__name__)


def get_s3_client():
    """Get a boto3 S3 client configured for MinIO.

    Override the endpoint via MINIO_ENDPOINT env var for local development.
    """
    import boto3
    from botocore.client import Config

    return boto3.client(
        "s3",
        endpoint_url=MINIO_ENDPOINT,
        aws_access_key_id=MINIO_ACCESS_KEY,
        aws_secret_access_key=MINIO_SECRET_KEY,
        config=Config(signature_version="s3v4"),
        region_name="us-east-1",
    )


def parse_s3_uri(path: str) -> Optional[Tuple[str, str]]:
    """Split s3://bucket/key into (bucket, key). None for local paths.

    Raises:
        ValueError: s3:// URI without bucket or key.
    """
    if not path.startswith("s3://"):
        return None
    bucket, _, key = path[len("s3://"):].partition("/")
    if not bucket or not key:
        raise ValueError(f"Invalid S3 URI '{path}', expected s3://bucket/key")
    return bucket, key


def format_score(value: float) -> str:
    """Fixed 6-decimal rendering used in the output table (0.123456789 -> 0.123457)."""
    return f"{value:.{SCORE_DECIMALS}f}"


def error_sidecar_path(output_path: str) -> str:
    """results.csv -> results.errors.csv (works for s3:// keys too)."""
    stem, ext = os.path.splitext(output_path)
    return f"{stem}.errors{ext or '.csv'}"


# ============================================================
# Input
# ============================================================

def parse_posts_csv(data: "bytes | str") -> List[Post]:
    """Parse CSV content into Posts. All columns are read as strings.

    Raises:
        InputDataError: non-UTF-8 bytes, unparseable CSV or missing
            required columns.
    """
    import pandas as pd

    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8-sig")
        df = pd.read_csv(io.StringIO(data), dtype=str, keep_default_na=False)
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise InputDataError(f"Could not parse input table: {exc}") from exc

    missing = [c for c in INPUT_COLUMNS if c not in df.columns]
    if missing:
        raise InputDataError(
            f"Input table is missing columns: {', '.join(missing)}",
            details={"columns": list(df.columns)},
        )

    return [
        Post(post_num=row.post_num, time=row.time, text=row.text, row_index=i)
        for i, row in enumerate(df[INPUT_COLUMNS].itertuples(index=False))
    ]


def read_posts(path: str) -> List[Post]:
    """Read the full input table from a local path or s3:// URI.

    Raises:
        InputDataError: file missing/unreadable or malformed. Fatal.
    """
    s3_location = parse_s3_uri(path)
    try:
        if s3_location:
            bucket, key = s3_location
            body = get_s3_client().get_object(Bucket=bucket, Key=key)["Body"].read()
        else:
            with open(path, "rb") as f:
                body = f.read()
    except Exception as exc:
        raise InputDataError(
            f"Could not read input table {path}: {exc}",
            details={"path": path},
        ) from exc

    posts = parse_posts_csv(body)
    logger.info("posts_loaded", path=path, rows=len(posts))
    return posts


# ============================================================
# Output
# ============================================================

def results_to_csv(results: List[ClassifiedPost]) -> str:
    """Serialize successful rows to the output table format."""
    import pandas as pd

    rows = [
        [
            r.post_num, r.time, r.text,
            format_score(r.long), format_score(r.neutral), format_score(r.short),
            r.sentiment,
        ]
        for r in results
        if not r.failed
    ]
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS).to_csv(index=False)


def errors_to_csv(results: List[ClassifiedPost]) -> str:
    """Serialize failed rows (post_num, time, text, error)."""
    import pandas as pd

    rows = [[r.post_num, r.time, r.text, r.error] for r in results if r.failed]
    return pd.DataFrame(rows, columns=ERROR_COLUMNS).to_csv(index=False)


def _write_text(path: str, content: str) -> None:
    s3_location = parse_s3_uri(path)
    if s3_location:
        bucket, key = s3_location
        get_s3_client().put_object(
            Bucket=bucket,
            Key=key,
            Body=content.encode("utf-8"),
            ContentType="text/csv",
        )
    else:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)


def write_results(results: List[ClassifiedPost], output_path: str) -> str:
    """Write the output table, plus an error sidecar if any row failed.

    Overwrites existing files (idempotent for Flyte retries).

    Returns:
        Summary string with paths and row counts.

    Raises:
        OutputWriteError: a write failed. The caller still holds the results.
    """
    failed = [r for r in results if r.failed]
    written = len(results) - len(failed)
    try:
        _write_text(output_path, results_to_csv(results))
        summary = f"Wrote {written} rows to {output_path}"
        if failed:
            errors_path = error_sidecar_path(output_path)
            _write_text(errors_path, errors_to_csv(results))
            summary += f", {len(failed)} failed rows to {errors_path}"
    except Exception as exc:
        logger.error("output_write_failed", path=output_path, error=str(exc))
        raise OutputWriteError(
            f"Could not write results to {output_path}: {exc}",
            details={"path": output_path, "rows": len(results)},
        ) from exc

    logger.info("results_written", path=output_path, rows=written, failed=len(failed))
    return summary
