"""Dataset partitioning into contiguous shards.

shard_size = ceil(total_rows / shard_count); shard i covers
[i * shard_size, min((i + 1) * shard_size, total_rows)). Trailing shards
may be short or empty, e.g. 23 rows / 10 shards -> [3,3,3,3,3,3,3,2,0,0].
"""

from typing import List, Sequence, Tuple

from src.shared.models import Post, Shard


def shard_bounds(total_rows: int, shard_count: int) -> List[Tuple[int, int]]:
    """Compute [start, stop) index ranges for every shard.

    Always returns exactly shard_count ranges; together they cover
    [0, total_rows) once, in order.

    Raises:
        ValueError: shard_count < 1 or total_rows < 0.
    """
    if shard_count < 1:
        raise ValueError(f"shard_count must be >= 1, got {shard_count}")
    if total_rows < 0:
        raise ValueError(f"total_rows must be >= 0, got {total_rows}")

    shard_size = -(-total_rows // shard_count)  # ceil
    bounds = []
    for i in range(shard_count):
        start = min(i * shard_size, total_rows)
        stop = min((i + 1) * shard_size, total_rows)
        bounds.append((start, stop))
    return bounds


def split_into_shards(posts: Sequence[Post], shard_count: int) -> List[Shard]:
    """Partition posts into shard_count contiguous Shards."""
    return [
        Shard(index=i, start=start, stop=stop, posts=tuple(posts[start:stop]))
        for i, (start, stop) in enumerate(shard_bounds(len(posts), shard_count))
    ]
