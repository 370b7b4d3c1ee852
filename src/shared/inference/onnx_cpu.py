"""ONNX Runtime CPU sentiment classifier.

Runs the fine-tuned Korean BERT post-sentiment model exported by
scripts/export_sentiment_model.py. ONNX Runtime has no training mode,
so every call is gradient-free and keeps no state between posts.

Model files expected in model_dir:
    - model_quantized.onnx (INT8, preferred) or model.onnx (FP32 fallback)
    - vocab.txt
"""

import os
from typing import TYPE_CHECKING

from src.shared.config import PAD_TOKEN_ID, SENTIMENT_MODEL_DIR
from src.shared.exceptions import ModelLoadError
from src.shared.inference.base import SentimentClassifier

if TYPE_CHECKING:
    import numpy as np


def resolve_model_path(model_dir: str) -> str:
    """Pick the quantized export if present, else the FP32 one."""
    # Quantized model is exported as model_quantized.onnx by optimum
    model_path = os.path.join(model_dir, "model_quantized.onnx")
    if not os.path.exists(model_path):
        model_path = os.path.join(model_dir, "model.onnx")
    if not os.path.exists(model_path):
        raise ModelLoadError(
            f"No ONNX model found in {model_dir}",
            details={"model_dir": model_dir},
        )
    return model_path


class OnnxCpuClassifier(SentimentClassifier):
    """Post sentiment classifier using ONNX Runtime CPU.

    Outputs 3 classes in LABELS order: long (0), neutral (1), short (2).
    """

    def __init__(self, model_dir: str = SENTIMENT_MODEL_DIR, pad_id: int = PAD_TOKEN_ID):
        super().__init__()
        import onnxruntime as ort

        model_path = resolve_model_path(model_dir)
        try:
            self._session = ort.InferenceSession(
                model_path,
                providers=["CPUExecutionProvider"],
            )
        except Exception as exc:
            raise ModelLoadError(
                f"Failed to load ONNX model {model_path}: {exc}",
                details={"model_path": model_path},
            ) from exc
        self._input_names = {i.name for i in self._session.get_inputs()}
        self._pad_id = pad_id

    def forward(self, input_ids: "np.ndarray") -> "np.ndarray":
        import numpy as np

        input_ids = np.asarray(input_ids, dtype=np.int64)
        ort_inputs = {"input_ids": input_ids}
        # Exports differ in which auxiliary inputs they declare
        if "attention_mask" in self._input_names:
            ort_inputs["attention_mask"] = (input_ids != self._pad_id).astype(np.int64)
        if "token_type_ids" in self._input_names:
            ort_inputs["token_type_ids"] = np.zeros_like(input_ids)

        return self._session.run(None, ort_inputs)[0]
