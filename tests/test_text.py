"""Tests for text canonicalization."""

import pytest

from src.shared.text import canonicalize


def test_empty_input():
    assert canonicalize("") == ""


def test_none_input():
    assert canonicalize(None) == ""


def test_all_noise_input():
    assert canonicalize("ㅋㅋㅋㅋ ㅡㅡ\n- dc official App") == ""


def test_app_signature_removed():
    assert canonicalize("내일 상한가 - dc official App") == "내일 상한가"


def test_laughter_and_bar_replaced_with_space():
    assert canonicalize("가즈아ㅋㅋ떡상ㅡㅡ") == "가즈아 떡상"


def test_newlines_become_spaces():
    assert canonicalize("첫줄\n둘째줄\n\n셋째") == "첫줄 둘째줄 셋째"


def test_disallowed_characters_replaced():
    assert canonicalize("삼전!! 7만원@@ 가능? #주식") == "삼전 7만원 가능? 주식"


def test_allowed_punctuation_kept():
    assert canonicalize("PER 12.5% -3.2% 왜?") == "PER 12.5% -3.2% 왜?"


def test_jamo_kept_except_fillers():
    assert canonicalize("ㅠㅠ ㄷㄷ ㅎㅎ") == "ㅠㅠ ㄷㄷ ㅎㅎ"


def test_case_preserved():
    # Lowercasing is the tokenizer's job
    assert canonicalize("Samsung LONG") == "Samsung LONG"


def test_whitespace_collapsed():
    assert canonicalize("  a \t\t b   c  ") == "a b c"


def test_emoji_and_cjk_removed():
    assert canonicalize("매수 🚀🚀 株式 買") == "매수"


def test_signature_reformed_by_filter_is_removed():
    assert canonicalize("매수 -@dc official App") == "매수"


@pytest.mark.parametrize("raw", [
    "",
    "ㅋㅋㅋ",
    "삼전!! 7만원@@ 가능? #주식",
    "  a \t\t b   c  ",
    "매수 -@dc official App",
    "-#-@dc official App@dc official App",
    "하락 예상\n- dc official App",
    "ㅡ-ㅡ dc official App",
])
def test_idempotent(raw):
    once = canonicalize(raw)
    assert canonicalize(once) == once
