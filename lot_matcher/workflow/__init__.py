"""Capture workflow state machine."""

from .capture import CaptureWorkflow

__all__ = ["CaptureWorkflow"]
