"""Runtime knobs read from the environment."""

import os

DEFAULT_LOW_STOCK_THRESHOLD = 5
DEFAULT_PAYMENT_LATENCY_SECONDS = 1.5
DEFAULT_PAYMENT_TIMEOUT_SECONDS = 10.0


def low_stock_threshold() -> int:
    return int(os.getenv("LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD))


def payment_latency_seconds() -> float:
    """Simulated gateway round trip. Tests set this to 0."""
    return float(os.getenv("PAYMENT_LATENCY_SECONDS", DEFAULT_PAYMENT_LATENCY_SECONDS))


def payment_timeout_seconds() -> float:
    return float(os.getenv("PAYMENT_TIMEOUT_SECONDS", DEFAULT_PAYMENT_TIMEOUT_SECONDS))
