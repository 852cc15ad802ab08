"""Telemetry and observability helpers.

This package emits deterministic stage events for synthesis requests.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
