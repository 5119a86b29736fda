"""Shared utilities for Aura Board."""

from aura.common.logger import setup_logger

__all__ = ["setup_logger"]
