"""Shared test fixtures for Post Sentiment Workflows.

Provides stub tokenizer/classifier backends and sample post tables so the
core (canonicalization, sharding, scheduling, aggregation, storage) runs
without model files, network or S3 access.
"""

import threading

import pytest

from src.shared.inference.base import SentimentClassifier
from src.shared.inference.tokenizer import SubwordEncoder, TokenizerAdapter
from src.shared.models import Post
from src.shared.pipeline import ModelContext, RowClassifier

CLS_ID = 2
SEP_ID = 3
PAD_ID = 1


class StubEncoder(SubwordEncoder):
    """One id per non-space character, wrapped as [CLS] ... [SEP].

    Raises ValueError for text containing "BOOM" to simulate a record the
    real tokenizer rejects.
    """

    def encode(self, text):
        if "BOOM" in text:
            raise ValueError("unencodable text")
        return [CLS_ID] + [10 + (ord(c) % 50) for c in text if c != " "] + [SEP_ID]


class StubClassifier(SentimentClassifier):
    """Returns fixed logits and records how many forward calls overlap."""

    def __init__(self, logits=(2.0, 1.0, 0.0), delay=0.0):
        super().__init__()
        self.logits = logits
        self.delay = delay
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._counter_lock = threading.Lock()

    def forward(self, input_ids):
        import time
        import numpy as np

        with self._counter_lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            return np.array([self.logits] * input_ids.shape[0], dtype=np.float64)
        finally:
            with self._counter_lock:
                self.active -= 1


def make_posts(n, text="삼성전자 오늘 간다"):
    return [
        Post(post_num=str(1000 + i), time=f"2026-10-19 09:{i % 60:02d}", text=f"{text} {i}", row_index=i)
        for i in range(n)
    ]


@pytest.fixture
def stub_encoder():
    return StubEncoder()


@pytest.fixture
def stub_classifier():
    return StubClassifier()


@pytest.fixture
def model_context(stub_encoder, stub_classifier):
    """ModelContext with stub backends, max_length=16 to exercise truncation."""
    return ModelContext(
        tokenizer=TokenizerAdapter(stub_encoder, max_length=16, pad_id=PAD_ID),
        classifier=stub_classifier,
    )


@pytest.fixture
def row_classifier(model_context):
    return RowClassifier(model_context)


@pytest.fixture
def sample_posts():
    """23 posts: the uneven 10-shard case."""
    return make_posts(23)


@pytest.fixture
def sample_csv():
    """A valid input table with a multi-line post and an all-noise post."""
    return (
        "post_num,time,text\n"
        "1,2026-10-19 09:00,삼성 가즈아 ㅋㅋㅋ\n"
        '2,2026-10-19 09:01,"하락 예상\n- dc official App"\n'
        "3,2026-10-19 09:02,ㅋㅋㅋㅋ\n"
    )
