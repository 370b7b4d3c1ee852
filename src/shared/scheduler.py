"""Shard scheduler: fan-out one worker per shard, fan-in all results.

Shard count and boundaries are fixed up front (no work queue, no
stealing). Every shard gets its own thread; the scheduler blocks until
all of them delivered, then hands the shard lists to the aggregator in
completion order.

Record-level failures never leave a worker (they become sentinel rows).
Anything else a worker raises propagates out of run().
"""

import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError, as_completed
from typing import List, Optional, Sequence

import structlog

from src.shared.aggregation import merge
from src.shared.config import RESTORE_INPUT_ORDER, SHARD_COUNT, SHARD_TIMEOUT_SECONDS
from src.shared.exceptions import ShardTimeoutError
from src.shared.models import ClassifiedPost, Post, Shard, ShardResult
from src.shared.pipeline import RowClassifier
from src.shared.sharding import split_into_shards

logger = structlog.get_logger(__name__)


class ShardScheduler:
    """Runs a RowClassifier over a dataset split into fixed shards.

    Args:
        row_classifier: Shared per-record classifier (read-only context).
        shard_count: Number of shards / concurrent workers.
        shard_timeout: Seconds to wait for all shards; None or <= 0 waits forever.
        restore_order: Sort the merged result by original row index.
    """

    def __init__(
        self,
        row_classifier: RowClassifier,
        shard_count: int = SHARD_COUNT,
        shard_timeout: Optional[float] = SHARD_TIMEOUT_SECONDS,
        restore_order: bool = RESTORE_INPUT_ORDER,
    ):
        if shard_count < 1:
            raise ValueError(f"shard_count must be >= 1, got {shard_count}")
        self.row_classifier = row_classifier
        self.shard_count = shard_count
        self.shard_timeout = shard_timeout if shard_timeout and shard_timeout > 0 else None
        self.restore_order = restore_order

    def process_shard(self, shard: Shard) -> ShardResult:
        """Classify every post of one shard, in order."""
        started = time.monotonic()
        log = logger.bind(shard=shard.index, start=shard.start, stop=shard.stop)
        log.debug("shard_started", rows=len(shard))

        results = [self.row_classifier.classify_or_sentinel(post) for post in shard.posts]

        result = ShardResult(
            shard_index=shard.index,
            results=results,
            elapsed_seconds=round(time.monotonic() - started, 3),
        )
        log.info(
            "shard_finished",
            rows=len(results),
            failed=result.num_failed,
            elapsed_seconds=result.elapsed_seconds,
        )
        return result

    def collect(self, shards: Sequence[Shard]) -> List[ShardResult]:
        """Dispatch all shards concurrently and wait for every one.

        Returns:
            ShardResults in completion order.

        Raises:
            ShardTimeoutError: shard_timeout elapsed first.
        """
        executor = ThreadPoolExecutor(
            max_workers=max(len(shards), 1),
            thread_name_prefix="shard",
        )
        futures = {executor.submit(self.process_shard, shard): shard.index for shard in shards}
        delivered = []
        completed = as_completed(futures, timeout=self.shard_timeout)
        while True:
            try:
                future = next(completed)
            except StopIteration:
                break
            except FuturesTimeoutError as exc:
                self._abort_on_timeout(executor, futures, exc)
            try:
                delivered.append(future.result())
            except BaseException:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
        executor.shutdown(wait=True)
        return delivered

    def _abort_on_timeout(self, executor, futures, exc):
        pending = sorted(idx for f, idx in futures.items() if not f.done())
        # Running threads cannot be interrupted; queued ones are dropped
        executor.shutdown(wait=False, cancel_futures=True)
        logger.error("shard_timeout", timeout_seconds=self.shard_timeout, pending_shards=pending)
        raise ShardTimeoutError(
            f"{len(pending)} shard(s) did not finish within {self.shard_timeout}s",
            details={"pending_shards": pending},
        ) from exc

    def run(self, posts: Sequence[Post], shard_count: Optional[int] = None) -> List[ClassifiedPost]:
        """Partition, classify concurrently, and merge.

        Args:
            posts: Full dataset, read before partitioning.
            shard_count: Override the scheduler's shard count for this run.

        Returns:
            One ClassifiedPost per input post (failed rows as sentinels).
        """
        if shard_count is None:
            shard_count = self.shard_count
        shards = split_into_shards(posts, shard_count)
        logger.info(
            "shards_planned",
            total_rows=len(posts),
            shard_count=shard_count,
            shard_sizes=[len(s) for s in shards],
        )

        shard_results = self.collect(shards)
        merged = merge(shard_results, restore_order=self.restore_order)

        logger.info(
            "shards_merged",
            rows=len(merged),
            failed=sum(r.num_failed for r in shard_results),
            completion_order=[r.shard_index for r in shard_results],
        )
        return merged
