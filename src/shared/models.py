"""Shared data models for Post Sentiment Workflows.

All models are plain Python dataclasses. Flytekit serializes them natively
as task inputs/outputs. No special Flyte type registration needed.

IMPORTANT (Flytekit constraint):
    Never pass dataclasses with Dict/List fields between Flyte tasks:
    causes Promise binding errors. Dataclasses with only primitive fields
    (str, int, float, bool) are safe in List[Dataclass].
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Post:
    """One input record read from the source table.

    row_index is the position in the source table; it is the record's
    identity when results are merged back together.
    """
    post_num: str
    time: str
    text: str
    row_index: int = -1


@dataclass(frozen=True)
class ClassScores:
    """Softmax probabilities over the three sentiment classes."""
    long: float
    neutral: float
    short: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.long, self.neutral, self.short)


@dataclass(frozen=True)
class ClassifiedPost:
    """A Post augmented with class scores and the derived label.

    Only primitive fields: safe in List[ClassifiedPost] between Flyte tasks.

    Failed rows are sentinels: sentiment="error", scores 0.0 and the
    failure message in `error`.
    """
    post_num: str
    time: str
    text: str
    long: float
    neutral: float
    short: float
    sentiment: str                 # "long", "neutral", "short" or "error"
    row_index: int = -1
    error: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.error)


@dataclass(frozen=True)
class Shard:
    """A contiguous slice [start, stop) of the input dataset."""
    index: int
    start: int
    stop: int
    posts: Tuple[Post, ...] = ()

    def __len__(self) -> int:
        return self.stop - self.start


@dataclass
class ShardResult:
    """Output of one shard worker, in the shard's own record order."""
    shard_index: int
    results: List[ClassifiedPost]
    elapsed_seconds: float = 0.0

    @property
    def num_failed(self) -> int:
        return sum(1 for r in self.results if r.failed)
