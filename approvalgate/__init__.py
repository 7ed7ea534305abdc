"""Admission webhook guarding ApprovalTask updates."""

__version__ = "0.1.0"
