"""
Adapters layer - Data sources standing in for the persistence layer.
"""

from .file_repository import FileScheduleRepository

__all__ = ["FileScheduleRepository"]
