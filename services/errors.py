# services/errors.py
from __future__ import annotations


class WidgetError(Exception):
    """Base para falhas que degradam o widget."""


class FetchFailure(WidgetError):
    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InsufficientSamples(WidgetError):
    def __init__(self, count: int):
        super().__init__(f"need at least 2 samples, got {count}")
        self.count = count
