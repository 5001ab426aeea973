"""Observability: logging and metrics for the dispatcher."""

from dispatcher.observability.logger import get_logger
from dispatcher.observability.metrics import Metrics

__all__ = ["get_logger", "Metrics"]
