"""Tests for the per-record classifier chain."""

from src.shared.models import Post
from src.shared.pipeline import RowClassifier, failed_post


def test_classify_record_composes_chain(row_classifier, stub_classifier):
    post = Post(post_num="7", time="2026-10-19 09:00", text="삼성 가즈아 ㅋㅋ", row_index=3)
    result = row_classifier.classify_record(post)

    assert result.post_num == "7"
    assert result.text == "삼성 가즈아 ㅋㅋ"     # original text, not canonical
    assert result.row_index == 3
    assert result.sentiment == "long"            # stub logits favour long
    assert abs(result.long + result.neutral + result.short - 1.0) < 1e-9
    assert stub_classifier.calls == 1


def test_input_post_not_mutated(row_classifier):
    post = Post(post_num="1", time="t", text="매수!!", row_index=0)
    row_classifier.classify_record(post)

    assert post == Post(post_num="1", time="t", text="매수!!", row_index=0)


def test_all_noise_post_still_classified(row_classifier):
    result = row_classifier.classify_record(Post("1", "t", "ㅋㅋㅋ ㅡㅡ", 0))

    assert not result.failed
    assert result.sentiment in ("long", "neutral", "short")


def test_unencodable_post_becomes_sentinel(row_classifier, stub_classifier):
    result = row_classifier.classify_or_sentinel(Post("9", "t", "BOOM", 4))

    assert result.failed
    assert result.sentiment == "error"
    assert result.row_index == 4
    assert "unencodable text" in result.error
    assert (result.long, result.neutral, result.short) == (0.0, 0.0, 0.0)
    assert stub_classifier.calls == 0


def test_failed_post_has_message():
    assert failed_post(Post("1", "t", "x", 0), "").error == "unknown error"
