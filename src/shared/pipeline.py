"""Row classification: canonicalize -> tokenize -> classify -> label.

ModelContext bundles the loaded tokenizer and classifier. It is built
once per run, owned by the scheduler, and shared read-only by every
shard worker.
"""

import os
from dataclasses import dataclass

import structlog

from src.shared.analytics import decide_label
from src.shared.config import (
    ERROR_LABEL,
    MAX_LENGTH,
    PAD_TOKEN_ID,
    SENTIMENT_MODEL_DIR,
)
from src.shared.exceptions import RecordClassificationError
from src.shared.inference.base import SentimentClassifier
from src.shared.inference.tokenizer import TokenizerAdapter
from src.shared.models import ClassifiedPost, Post
from src.shared.text import canonicalize

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ModelContext:
    """Loaded tokenizer + classifier, shared by all workers."""
    tokenizer: TokenizerAdapter
    classifier: SentimentClassifier


def load_model_context(
    model_dir: str = SENTIMENT_MODEL_DIR,
    max_length: int = MAX_LENGTH,
    pad_id: int = PAD_TOKEN_ID,
) -> ModelContext:
    """Load vocab.txt and the ONNX model from model_dir.

    Raises:
        ModelLoadError: vocabulary or model missing/unloadable. Fatal.
    """
    from src.shared.inference.onnx_cpu import OnnxCpuClassifier
    from src.shared.inference.tokenizer import WordPieceEncoder

    encoder = WordPieceEncoder(os.path.join(model_dir, "vocab.txt"))
    if encoder.pad_token_id != pad_id:
        logger.warning(
            "pad_id_mismatch",
            configured_pad_id=pad_id,
            vocab_pad_id=encoder.pad_token_id,
        )
    classifier = OnnxCpuClassifier(model_dir=model_dir, pad_id=pad_id)
    logger.info("model_loaded", model_dir=model_dir, max_length=max_length)

    return ModelContext(
        tokenizer=TokenizerAdapter(encoder, max_length=max_length, pad_id=pad_id),
        classifier=classifier,
    )


class RowClassifier:
    """Classifies one Post at a time against a shared ModelContext."""

    def __init__(self, context: ModelContext):
        self.context = context

    def classify_record(self, post: Post) -> ClassifiedPost:
        """Run the full per-record chain.

        Raises:
            RecordClassificationError: encoding or inference failed.
        """
        canonical = canonicalize(post.text)
        tokens = self.context.tokenizer.tokenize(canonical)
        scores = self.context.classifier.classify(tokens)

        return ClassifiedPost(
            post_num=post.post_num,
            time=post.time,
            text=post.text,
            long=scores.long,
            neutral=scores.neutral,
            short=scores.short,
            sentiment=decide_label(scores),
            row_index=post.row_index,
        )

    def classify_or_sentinel(self, post: Post) -> ClassifiedPost:
        """classify_record, but record-level failures become sentinel rows."""
        try:
            return self.classify_record(post)
        except RecordClassificationError as exc:
            logger.warning(
                "record_failed",
                row_index=post.row_index,
                post_num=post.post_num,
                error=exc.message,
            )
            return failed_post(post, exc.message)


def failed_post(post: Post, error: str) -> ClassifiedPost:
    """Sentinel result for a post that could not be classified."""
    return ClassifiedPost(
        post_num=post.post_num,
        time=post.time,
        text=post.text,
        long=0.0,
        neutral=0.0,
        short=0.0,
        sentiment=ERROR_LABEL,
        row_index=post.row_index,
        error=error or "unknown error",
    )
