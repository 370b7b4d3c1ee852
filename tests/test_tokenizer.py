"""Tests for the fixed-length tokenizer adapter."""

import pytest
import numpy as np

from src.shared.exceptions import ModelLoadError, RecordClassificationError
from src.shared.inference.tokenizer import (
    SubwordEncoder,
    TokenizerAdapter,
    WordPieceEncoder,
    fit_to_length,
)

from conftest import CLS_ID, PAD_ID, SEP_ID


# ============================================================
# fit_to_length
# ============================================================

def test_fit_pads_short_sequences():
    assert fit_to_length([2, 10, 3], 6, PAD_ID) == [2, 10, 3, 1, 1, 1]


def test_fit_passes_exact_length_through():
    assert fit_to_length([2, 10, 11, 3], 4, PAD_ID) == [2, 10, 11, 3]


def test_fit_truncates_and_keeps_end_marker():
    assert fit_to_length([2, 10, 11, 12, 13, 3], 4, PAD_ID) == [2, 10, 11, 3]


def test_fit_length_one():
    assert fit_to_length([2, 10, 3], 1, PAD_ID) == [3]


# ============================================================
# TokenizerAdapter
# ============================================================

@pytest.mark.parametrize("text", ["", "가", "삼성 전자", "가" * 500])
def test_output_is_always_max_length(stub_encoder, text):
    adapter = TokenizerAdapter(stub_encoder, max_length=128, pad_id=PAD_ID)
    tokens = adapter.tokenize(text)

    assert tokens.shape == (1, 128)
    assert tokens.dtype == np.int64
    assert (tokens >= 0).all()


def test_empty_text_is_special_tokens_plus_padding(stub_encoder):
    adapter = TokenizerAdapter(stub_encoder, max_length=8, pad_id=PAD_ID)
    tokens = adapter.tokenize("")

    assert tokens[0].tolist() == [CLS_ID, SEP_ID] + [PAD_ID] * 6


def test_long_text_keeps_cls_and_sep(stub_encoder):
    adapter = TokenizerAdapter(stub_encoder, max_length=8, pad_id=PAD_ID)
    row = adapter.tokenize("가나다라마바사아자차카")[0].tolist()

    assert len(row) == 8
    assert row[0] == CLS_ID
    assert row[-1] == SEP_ID
    assert PAD_ID not in row


def test_encoder_failure_raises_record_error(stub_encoder):
    adapter = TokenizerAdapter(stub_encoder, max_length=8, pad_id=PAD_ID)

    with pytest.raises(RecordClassificationError, match="encode"):
        adapter.tokenize("BOOM")


def test_negative_ids_rejected():
    class NegativeEncoder(SubwordEncoder):
        def encode(self, text):
            return [2, -5, 3]

    adapter = TokenizerAdapter(NegativeEncoder(), max_length=8, pad_id=PAD_ID)
    with pytest.raises(RecordClassificationError, match="negative"):
        adapter.tokenize("x")


@pytest.mark.parametrize("output", [None, ["a", "b"], [2, None, 3]])
def test_malformed_encoder_output_rejected(output):
    class BadEncoder(SubwordEncoder):
        def encode(self, text):
            return output

    adapter = TokenizerAdapter(BadEncoder(), max_length=8, pad_id=PAD_ID)
    with pytest.raises(RecordClassificationError, match="encode"):
        adapter.tokenize("x")


def test_invalid_max_length(stub_encoder):
    with pytest.raises(ValueError):
        TokenizerAdapter(stub_encoder, max_length=0)


def test_subword_encoder_is_abstract():
    with pytest.raises(TypeError):
        SubwordEncoder()


def test_wordpiece_missing_vocab(tmp_path):
    with pytest.raises(ModelLoadError, match="Vocabulary not found"):
        WordPieceEncoder(str(tmp_path / "vocab.txt"))


def test_wordpiece_uses_configured_special_tokens(tmp_path):
    vocab = tmp_path / "vocab.txt"
    vocab.write_text("\n".join(["[UNK]", "[PAD]", "[CLS]", "[SEP]", "[MASK]", "sam", "##sung"]) + "\n", encoding="utf-8")
    encoder = WordPieceEncoder(str(vocab))

    assert encoder.pad_token_id == PAD_ID
    assert encoder.encode("") == [CLS_ID, SEP_ID]
    assert encoder.encode("SamSung") == [CLS_ID, 5, 6, SEP_ID]
