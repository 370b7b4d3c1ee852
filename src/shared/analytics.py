"""Shared analytics functions for Post Sentiment Workflows.

Pure computational functions: the label decision rule and summary
statistics over classified posts. No storage access.
"""

from typing import Dict, List

from src.shared.config import ERROR_LABEL, LABELS
from src.shared.models import ClassifiedPost, ClassScores


def decide_label(scores: ClassScores) -> str:
    """Pick the sentiment label from class scores.

    long and neutral win only when strictly greater than both others.
    Everything else, including any tie, resolves to "short".

    Examples:
        (0.5, 0.3, 0.2) -> "long"
        (0.3, 0.5, 0.2) -> "neutral"
        (0.2, 0.3, 0.5) -> "short"
        (0.4, 0.4, 0.2) -> "short"
    """
    long, neutral, short = scores.as_tuple()
    if long > neutral and long > short:
        return "long"
    elif neutral > long and neutral > short:
        return "neutral"
    return "short"


def count_labels(results: List[ClassifiedPost]) -> Dict[str, int]:
    """Count posts per label, including the error sentinel.

    Returns:
        Dict with one key per label in LABELS plus ERROR_LABEL, zeros included.
    """
    counts = {label: 0 for label in LABELS}
    counts[ERROR_LABEL] = 0
    for r in results:
        counts[r.sentiment] = counts.get(r.sentiment, 0) + 1
    return counts


def mean_scores(results: List[ClassifiedPost]) -> Dict[str, float]:
    """Average class probabilities over successfully classified posts.

    Returns:
        Dict long/neutral/short -> mean probability. All 0.0 if no
        successful rows.
    """
    ok = [r for r in results if not r.failed]
    if not ok:
        return {label: 0.0 for label in LABELS}
    return {
        "long": round(sum(r.long for r in ok) / len(ok), 6),
        "neutral": round(sum(r.neutral for r in ok) / len(ok), 6),
        "short": round(sum(r.short for r in ok) / len(ok), 6),
    }


def compute_long_short_ratio(counts: Dict[str, int]) -> float:
    """Ratio of long to short posts.

    Returns:
        long / short, or -1.0 if there are no short posts.
    """
    shorts = counts.get("short", 0)
    if shorts == 0:
        return -1.0
    return round(counts.get("long", 0) / shorts, 4)


def build_sentiment_report(results: List[ClassifiedPost]) -> str:
    """Format a text summary of a classification run.

    Returns:
        Report with totals, label distribution, mean scores, long/short
        ratio and the first failed posts.
    """
    counts = count_labels(results)
    means = mean_scores(results)
    ratio = compute_long_short_ratio(counts)
    total = len(results)

    lines = [
        f"{'=' * 45}",
        "  Post Sentiment Report",
        f"{'=' * 45}",
        f"Posts:             {total}",
        f"Classified:        {total - counts[ERROR_LABEL]}",
        f"Failed:            {counts[ERROR_LABEL]}",
        "",
        "Label Distribution:",
    ]
    for label in LABELS:
        share = counts[label] / total if total else 0.0
        lines.append(f"  {label:8s} {counts[label]:6d}  {share:6.1%}")
    lines.append("")

    lines.append("Mean Scores:")
    for label in LABELS:
        lines.append(f"  {label:8s} {means[label]:.6f}")
    lines.append("")

    if ratio >= 0:
        lines.append(f"Long/Short ratio:  {ratio:.2f}")
    else:
        lines.append("Long/Short ratio:  n/a (no short posts)")

    failed = [r for r in results if r.failed]
    if failed:
        lines.append("")
        lines.append("Failed posts (first 10):")
        for r in failed[:10]:
            lines.append(f"  #{r.post_num}: {r.error}")

    lines.append(f"{'=' * 45}")
    return "\n".join(lines)
