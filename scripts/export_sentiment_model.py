#!/usr/bin/env python3
"""Export and quantize the post sentiment model to ONNX INT8.

One-time script. Run on a development machine (not the cluster).
Takes a fine-tuned HuggingFace BERT sequence-classification checkpoint
(3 labels: long, neutral, short) and writes model_quantized.onnx plus
vocab.txt to models/kr-bert-post-sentiment/.

Usage:
    python scripts/export_sentiment_model.py /path/to/checkpoint

Requires (dev only, NOT runtime deps):
    pip install optimum[onnxruntime] transformers torch
"""

import os
import shutil
import sys

OUTPUT_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "models",
    "kr-bert-post-sentiment",
)
ID2LABEL = {0: "long", 1: "neutral", 2: "short"}


def main(checkpoint_dir: str):
    from optimum.onnxruntime import ORTModelForSequenceClassification, ORTQuantizer
    from optimum.onnxruntime.configuration import AutoQuantizationConfig
    from transformers import AutoConfig, AutoTokenizer

    config = AutoConfig.from_pretrained(checkpoint_dir)
    if config.num_labels != len(ID2LABEL):
        raise SystemExit(f"Expected {len(ID2LABEL)} labels, checkpoint has {config.num_labels}")

    print(f"Exporting {checkpoint_dir} to ONNX...")

    # Step 1: Export to ONNX
    onnx_dir = OUTPUT_DIR + "-fp32"
    model = ORTModelForSequenceClassification.from_pretrained(checkpoint_dir, export=True)
    tokenizer = AutoTokenizer.from_pretrained(checkpoint_dir)
    model.save_pretrained(onnx_dir)
    tokenizer.save_pretrained(onnx_dir)
    print(f"FP32 ONNX model saved to {onnx_dir}")

    # Step 2: Quantize to INT8 (dynamic, x86 AVX2)
    print("Quantizing to INT8...")
    quantizer = ORTQuantizer.from_pretrained(onnx_dir)
    qconfig = AutoQuantizationConfig.avx2(is_static=False, per_channel=False)
    quantizer.quantize(save_dir=OUTPUT_DIR, quantization_config=qconfig)

    # Step 3: The runtime only needs vocab.txt next to the model
    vocab_src = os.path.join(onnx_dir, "vocab.txt")
    if not os.path.exists(vocab_src):
        raise SystemExit(f"Checkpoint tokenizer has no vocab.txt ({onnx_dir})")
    shutil.copy(vocab_src, os.path.join(OUTPUT_DIR, "vocab.txt"))
    pad_id = tokenizer.convert_tokens_to_ids("[PAD]")
    print(f"INT8 quantized model saved to {OUTPUT_DIR} ([PAD] id = {pad_id}, set PAD_TOKEN_ID)")

    # Step 4: Report sizes
    fp32_size = sum(
        os.path.getsize(os.path.join(onnx_dir, f))
        for f in os.listdir(onnx_dir)
        if f.endswith(".onnx")
    )
    int8_size = sum(
        os.path.getsize(os.path.join(OUTPUT_DIR, f))
        for f in os.listdir(OUTPUT_DIR)
        if f.endswith(".onnx")
    )
    print(f"FP32 size: {fp32_size / 1024 / 1024:.1f} MB")
    print(f"INT8 size: {int8_size / 1024 / 1024:.1f} MB")

    shutil.rmtree(onnx_dir)
    print(f"Cleaned up {onnx_dir}")
    print("\nDone! Point SENTIMENT_MODEL_DIR at the output directory.")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    main(sys.argv[1])
