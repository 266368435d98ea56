"""Validate metric records and publish them to AWS CloudWatch from a workflow step."""

__version__ = "1.0.0"
