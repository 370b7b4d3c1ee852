"""Tokenizer adapter: canonical text -> fixed-length token id batch.

The subword vocabulary is an external capability (SubwordEncoder).
TokenizerAdapter owns the fixed-length contract on top of it:

    encoded length > max_length  -> truncate, keep the trailing [SEP]
    encoded length < max_length  -> right-pad with the pad id
    encoded length == max_length -> unchanged

Output is always a (1, max_length) int64 array: the classifier expects a
batch dimension even for a single post.
"""

import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from src.shared.config import MAX_LENGTH, PAD_TOKEN_ID, SPECIAL_TOKENS
from src.shared.exceptions import ModelLoadError, RecordClassificationError

if TYPE_CHECKING:
    import numpy as np


class SubwordEncoder(ABC):
    """Abstract subword tokenizer.

    Implementations return ids already wrapped with [CLS] ... [SEP].
    """

    @abstractmethod
    def encode(self, text: str) -> List[int]:
        """Encode text to subword ids including special tokens."""
        ...


class WordPieceEncoder(SubwordEncoder):
    """BERT WordPiece tokenizer built from a plain vocab.txt.

    Normalization matches the classifier's training setup: clean control
    chars, split CJK chars, strip accents, lowercase. Post-processing wraps
    every sequence as [CLS] ... [SEP].
    """

    def __init__(self, vocab_path: str):
        from transformers import BertTokenizerFast

        if not os.path.exists(vocab_path):
            raise ModelLoadError(
                f"Vocabulary not found at {vocab_path}",
                details={"vocab_path": vocab_path},
            )
        self._tokenizer = BertTokenizerFast(
            vocab_file=vocab_path,
            do_lower_case=True,
            strip_accents=True,
            tokenize_chinese_chars=True,
            **SPECIAL_TOKENS,
        )

    @property
    def pad_token_id(self) -> int:
        return self._tokenizer.pad_token_id

    def encode(self, text: str) -> List[int]:
        encoded = self._tokenizer(
            text,
            add_special_tokens=True,
            truncation=False,
            padding=False,
        )
        return list(encoded["input_ids"])


def fit_to_length(ids: List[int], max_length: int, pad_id: int) -> List[int]:
    """Truncate or right-pad ids to exactly max_length.

    Truncation drops the rightmost overflow but keeps the final id (the
    [SEP] end marker) in the last position.
    """
    if len(ids) > max_length:
        if max_length == 1:
            return ids[-1:]
        return ids[:max_length - 1] + ids[-1:]
    if len(ids) < max_length:
        return ids + [pad_id] * (max_length - len(ids))
    return list(ids)


class TokenizerAdapter:
    """Turns canonical text into a (1, max_length) int64 token batch."""

    def __init__(
        self,
        encoder: SubwordEncoder,
        max_length: int = MAX_LENGTH,
        pad_id: int = PAD_TOKEN_ID,
    ):
        if max_length < 1:
            raise ValueError(f"max_length must be >= 1, got {max_length}")
        if pad_id < 0:
            raise ValueError(f"pad_id must be non-negative, got {pad_id}")
        self.encoder = encoder
        self.max_length = max_length
        self.pad_id = pad_id

    def tokenize(self, canonical_text: str) -> "np.ndarray":
        """Encode and fit canonical text to the fixed sequence length.

        Empty text is valid: it encodes to [CLS] [SEP] followed by padding.

        Raises:
            RecordClassificationError: the encoder rejected the text or
                produced something other than non-negative integer ids.
        """
        import numpy as np

        try:
            ids = [int(i) for i in self.encoder.encode(canonical_text)]
        except Exception as exc:
            raise RecordClassificationError(
                f"Tokenizer failed to encode text: {exc}",
                details={"text": canonical_text[:80]},
            ) from exc

        if any(i < 0 for i in ids):
            raise RecordClassificationError(
                "Tokenizer produced negative token ids",
                details={"text": canonical_text[:80]},
            )

        fitted = fit_to_length(ids, self.max_length, self.pad_id)
        return np.asarray([fitted], dtype=np.int64)
