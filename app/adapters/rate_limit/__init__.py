"""Submission history adapters for the rolling-window limiter."""

from app.adapters.rate_limit.base import AbstractSubmissionHistory

__all__ = ["AbstractSubmissionHistory"]
