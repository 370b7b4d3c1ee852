"""Abstract base class for sentiment classifiers.

Inference-Abstraction-Layer: the network is an opaque capability.
Backends implement forward() on a token id batch; the base class owns
softmax, value extraction and serialization of concurrent calls.

Current backend: OnnxCpuClassifier (ONNX Runtime on CPU).
"""

import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from src.shared.config import LABELS
from src.shared.exceptions import RecordClassificationError
from src.shared.models import ClassScores

if TYPE_CHECKING:
    import numpy as np


def softmax(logits: "np.ndarray") -> "np.ndarray":
    """Row-wise numerically stable softmax."""
    import numpy as np

    logits = np.asarray(logits, dtype=np.float64)
    exp_logits = np.exp(logits - np.max(logits, axis=-1, keepdims=True))
    return exp_logits / exp_logits.sum(axis=-1, keepdims=True)


class SentimentClassifier(ABC):
    """Abstract classifier producing long/neutral/short scores from token ids.

    Subclasses implement forward() for a specific backend. classify() holds
    a lock around forward(), so one instance can be shared by every shard
    worker even when the backend's compute context is not thread-safe.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def forward(self, input_ids: "np.ndarray") -> "np.ndarray":
        """Run the network in inference mode.

        Args:
            input_ids: int64 array of shape (batch, max_length).

        Returns:
            Raw logits of shape (batch, 3), class order long/neutral/short.
        """
        ...

    def classify(self, tokens: "np.ndarray") -> ClassScores:
        """Classify a single-example token batch into class probabilities.

        Args:
            tokens: (1, max_length) int64 array from TokenizerAdapter.

        Returns:
            ClassScores with plain float probabilities.

        Raises:
            RecordClassificationError: the backend failed, returned
                logits of the wrong shape, or returned non-finite values.
        """
        try:
            with self._lock:
                logits = self.forward(tokens)
        except Exception as exc:
            raise RecordClassificationError(f"Inference failed: {exc}") from exc

        import numpy as np

        probs = softmax(logits)
        if probs.ndim != 2 or probs.shape[0] < 1 or probs.shape[1] != len(LABELS):
            raise RecordClassificationError(
                f"Expected logits of shape (1, {len(LABELS)}), got {tuple(probs.shape)}"
            )

        row = probs[0]
        if not np.isfinite(row).all():
            raise RecordClassificationError(
                "Classifier returned non-finite scores",
                details={"scores": [float(v) for v in row]},
            )
        return ClassScores(**{label: float(row[i]) for i, label in enumerate(LABELS)})
