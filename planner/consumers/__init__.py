"""Consumers of aggregated data - timeline assembly."""

from planner.consumers.timeline import merged_timeline

__all__ = ["merged_timeline"]
