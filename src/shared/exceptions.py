"""Custom exceptions for the post sentiment pipeline.

Fatal errors (input, model load) abort the run. Record-level errors are
caught inside the shard worker and turned into sentinel rows.
"""


class SentimentPipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputDataError(SentimentPipelineError):
    """Source table is missing, unreadable, or lacks required columns."""


class ModelLoadError(SentimentPipelineError):
    """Vocabulary or model artifact could not be loaded."""


class RecordClassificationError(SentimentPipelineError):
    """Encoding or inference failed for a single record.

    Recoverable: the shard records a sentinel row and moves on.
    """


class ShardTimeoutError(SentimentPipelineError):
    """Not every shard delivered its results before the deadline."""


class OutputWriteError(SentimentPipelineError):
    """The output table (or its error sidecar) could not be written."""
