"""Configuration for Post Sentiment Workflows.

All settings are read from environment variables with sensible defaults
for a single-node batch run. Override via env vars for different environments.
"""

import os

# ============================================================
# Input / Output
# ============================================================
# Local paths or s3://bucket/key URIs (MinIO)

INPUT_PATH = os.environ.get("INPUT_PATH", "test.csv")
OUTPUT_PATH = os.environ.get("OUTPUT_PATH", "results.csv")

INPUT_COLUMNS = ["post_num", "time", "text"]
OUTPUT_COLUMNS = ["post_num", "time", "text", "long", "neutral", "short", "sentiment"]
ERROR_COLUMNS = ["post_num", "time", "text", "error"]

SCORE_DECIMALS = 6

# ============================================================
# Model / Tokenizer
# ============================================================
# Directory holding vocab.txt and model_quantized.onnx (or model.onnx).
# Produced by scripts/export_sentiment_model.py.

SENTIMENT_MODEL_DIR = os.environ.get(
    "SENTIMENT_MODEL_DIR",
    "/root/models/kr-bert-post-sentiment",
)

MAX_LENGTH = int(os.environ.get("MAX_LENGTH", "128"))       # Fixed token sequence length
PAD_TOKEN_ID = int(os.environ.get("PAD_TOKEN_ID", "1"))     # [PAD] id in the exported vocab
# Special token strings in the vocab, keyed by tokenizer role
SPECIAL_TOKENS = {
    "unk_token": "[UNK]",
    "sep_token": "[SEP]",
    "pad_token": "[PAD]",
    "cls_token": "[CLS]",
    "mask_token": "[MASK]",
}

# Class order of the classifier head: index 0, 1, 2
LABELS = ("long", "neutral", "short")
ERROR_LABEL = "error"

# ============================================================
# Sharding / Concurrency
# ============================================================

SHARD_COUNT = int(os.environ.get("SHARD_COUNT", "10"))
# 0 = wait for every shard without a deadline
SHARD_TIMEOUT_SECONDS = float(os.environ.get("SHARD_TIMEOUT_SECONDS", "0"))
RESTORE_INPUT_ORDER = os.environ.get("RESTORE_INPUT_ORDER", "true").lower() == "true"

# ============================================================
# MinIO Configuration (S3-compatible)
# ============================================================
# Only used when INPUT_PATH / OUTPUT_PATH are s3:// URIs

MINIO_ENDPOINT = os.environ.get("MINIO_ENDPOINT", "http://minio.flyte.svc.cluster.local:9000")
MINIO_ACCESS_KEY = os.environ.get("AWS_ACCESS_KEY_ID", "minio")
MINIO_SECRET_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY", "miniostorage")

# ============================================================
# Logging
# ============================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "console")        # "console" or "json"
