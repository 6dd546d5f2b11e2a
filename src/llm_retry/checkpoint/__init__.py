"""
LLM Retry - Checkpoint Storage.

Tagged conversation checkpoints stored as JSON files.
"""

from .store import CheckpointStore, Conversation, project_temp_dir

__all__ = [
    "CheckpointStore",
    "Conversation",
    "project_temp_dir",
]
