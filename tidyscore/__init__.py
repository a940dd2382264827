"""tidyscore: tf-idf scoring over tidy, one-token-per-row text."""

from __future__ import annotations

__version__ = "0.1.0"
