"""
File-backed checkpoint store for conversation history.

Checkpoints are JSON arrays saved as `checkpoint-<tag>.json` inside a
per-project temp directory. Reads never raise: a missing file is an empty
checkpoint, and an unreadable one is logged and treated as empty.
"""

import asyncio
import hashlib
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

Conversation = list[dict[str, Any]]

CHECKPOINT_PREFIX = "checkpoint-"
CHECKPOINT_SUFFIX = ".json"


def project_temp_dir(cwd: str | os.PathLike[str] | None = None) -> Path:
    """Per-project temp directory, keyed by a hash of the project root."""
    root = os.fspath(cwd) if cwd is not None else os.getcwd()
    digest = hashlib.sha256(root.encode("utf-8")).hexdigest()
    return Path.home() / ".llm-retry" / "tmp" / digest


def _write_json(path: Path, data: Any) -> None:
    tmp = path.with_name(f"{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class CheckpointStore:
    """
    Keyed JSON blob store for saved conversations.

    The storage directory is created lazily; `initialize()` is idempotent,
    so concurrent first calls simply run it more than once.
    """

    def __init__(self, base_dir: str | os.PathLike[str] | None = None):
        """
        Initialize the store.

        Args:
            base_dir: Storage directory (default: project_temp_dir())
        """
        self.base_dir = Path(base_dir) if base_dir is not None else project_temp_dir()
        self._initialized = False

    async def initialize(self) -> None:
        """Create the storage directory if needed."""
        if self._initialized:
            return
        await asyncio.to_thread(self.base_dir.mkdir, parents=True, exist_ok=True)
        self._initialized = True

    def _checkpoint_path(self, tag: str) -> Path:
        if not tag:
            raise ValueError("No checkpoint tag specified.")
        if any(sep and sep in tag for sep in ("/", os.sep, os.altsep)):
            raise ValueError(f"Checkpoint tag must not contain path separators: {tag!r}")
        return self.base_dir / f"{CHECKPOINT_PREFIX}{tag}{CHECKPOINT_SUFFIX}"

    async def save(self, tag: str, conversation: Conversation) -> None:
        """
        Save a conversation under a tag.

        Write failures are logged, not raised.

        Raises:
            ValueError: If the tag is empty or contains a path separator
        """
        path = self._checkpoint_path(tag)
        try:
            await self.initialize()
            await asyncio.to_thread(_write_json, path, conversation)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing checkpoint file {path}: {e}")
            return
        logger.debug(f"Saved checkpoint '{tag}' ({len(conversation)} entries)")

    async def load(self, tag_or_path: str) -> Conversation:
        """
        Load a conversation by tag or absolute file path.

        Returns:
            The saved conversation, or an empty list when the checkpoint is
            absent, unreadable, not a JSON array, or the tag is invalid
        """
        if os.path.isabs(tag_or_path):
            path = Path(tag_or_path)
        else:
            try:
                path = self._checkpoint_path(tag_or_path)
            except ValueError as e:
                logger.warning(f"Cannot load checkpoint: {e}")
                return []

        try:
            content = await asyncio.to_thread(_read_text, path)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read checkpoint file {path}: {e}")
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse checkpoint file {path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(
                f"Checkpoint file at {path} is not a valid JSON array. "
                "Returning empty checkpoint."
            )
            return []
        return data

    async def list(self) -> list[str]:
        """List the tags of all saved checkpoints."""
        try:
            names = await asyncio.to_thread(os.listdir, self.base_dir)
        except OSError:
            return []
        return sorted(
            name[len(CHECKPOINT_PREFIX) : -len(CHECKPOINT_SUFFIX)]
            for name in names
            if name.startswith(CHECKPOINT_PREFIX)
            and name.endswith(CHECKPOINT_SUFFIX)
            and len(name) > len(CHECKPOINT_PREFIX) + len(CHECKPOINT_SUFFIX)
        )
