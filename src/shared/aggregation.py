"""Merge per-shard results into the final result set."""

from typing import List, Sequence

from src.shared.models import ClassifiedPost, ShardResult


def merge(
    shard_results: Sequence[ShardResult],
    restore_order: bool = False,
) -> List[ClassifiedPost]:
    """Concatenate shard outputs.

    Without restore_order the shards are concatenated in the order given
    (the scheduler passes them in completion order, which is
    nondeterministic). Each shard's own row order is always kept.

    Args:
        shard_results: Results as delivered by the workers.
        restore_order: Sort the merged rows by original row_index.

    Returns:
        One ClassifiedPost per input post.
    """
    merged = []
    for shard in shard_results:
        merged.extend(shard.results)

    if restore_order:
        merged.sort(key=lambda r: r.row_index)
    return merged
