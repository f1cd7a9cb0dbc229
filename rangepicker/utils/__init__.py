"""Shared utilities for the rangepicker engine."""
