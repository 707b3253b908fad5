#!/usr/bin/env python3
"""
Workspace Snapshot Document

The planner's user-entered state is stored as one opaque, versioned JSON
document:

    {"schemaVersion": 1, "rev": "...", "updatedAt": "...", "updatedBy": ..., "data": {...}}

SnapshotStore keeps that document in a local file and applies the same
optimistic-concurrency rule as the remote state endpoint: once a document
exists, every write must name the revision it was based on.

The projection engine never touches the store; callers load a document and
hand `document.data` to the engine.
"""

import logging
import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .json_utils import read_json, write_json

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_REV_ALPHABET = string.digits + string.ascii_lowercase


class SnapshotFormatError(ValueError):
    """Raised when a stored document does not have the expected shape."""


class RevisionConflictError(RuntimeError):
    """Raised when a write is not based on the current stored revision."""

    MISSING_IF_MATCH = "MISSING_IF_MATCH"
    REV_MISMATCH = "REV_MISMATCH"

    def __init__(self, reason: str, current_rev: str | None, updated_at: str | None = None):
        super().__init__(f"{reason}: stored revision is {current_rev}")
        self.reason = reason
        self.current_rev = current_rev
        self.updated_at = updated_at


def new_rev() -> str:
    """Revision id: epoch milliseconds plus six random base-36 characters."""
    suffix = "".join(random.choices(_REV_ALPHABET, k=6))
    return f"{int(time.time() * 1000)}-{suffix}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class SnapshotDocument:
    """One stored revision of the workspace state."""

    rev: str
    updated_at: str
    data: dict[str, Any] = field(default_factory=dict)
    updated_by: str | None = None
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def from_dict(cls, payload: Any) -> "SnapshotDocument":
        """
        Build from the stored JSON shape.

        Raises:
            SnapshotFormatError: If `data` is missing or not an object, or
                schemaVersion is not an integer
        """
        if not isinstance(payload, dict):
            raise SnapshotFormatError("Snapshot document must be a JSON object")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise SnapshotFormatError("Snapshot document has no data object")
        try:
            schema_version = int(payload.get("schemaVersion") or SCHEMA_VERSION)
        except (TypeError, ValueError, OverflowError) as e:
            raise SnapshotFormatError(
                f"Invalid schemaVersion: {payload.get('schemaVersion')!r}"
            ) from e
        return cls(
            rev=str(payload.get("rev") or ""),
            updated_at=str(payload.get("updatedAt") or ""),
            data=data,
            updated_by=payload.get("updatedBy"),
            schema_version=schema_version,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "rev": self.rev,
            "updatedAt": self.updated_at,
            "updatedBy": self.updated_by,
            "data": self.data,
        }


class SnapshotStore:
    """File-backed store for the workspace snapshot document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> SnapshotDocument:
        """
        Load the stored document.

        Raises:
            FileNotFoundError: If no document has been saved yet
            SnapshotFormatError: If the file is not a valid snapshot document
        """
        if not self.path.exists():
            raise FileNotFoundError(f"No snapshot found at {self.path}")
        try:
            payload = read_json(self.path)
        except ValueError as e:
            raise SnapshotFormatError(f"Invalid JSON in {self.path}: {e}") from e
        return SnapshotDocument.from_dict(payload)

    def save(
        self,
        data: dict[str, Any],
        if_match_rev: str | None = None,
        updated_by: str | None = None,
    ) -> SnapshotDocument:
        """
        Store a new revision of the workspace data.

        Args:
            data: Workspace state (must be a dict)
            if_match_rev: Revision the caller last read; required once a document exists
            updated_by: Optional editor label

        Returns:
            The newly stored document

        Raises:
            SnapshotFormatError: If data is not a dict
            RevisionConflictError: If if_match_rev is missing or stale
        """
        if not isinstance(data, dict):
            raise SnapshotFormatError("Snapshot data must be a JSON object")

        if self.exists():
            current = self.load()
            if not if_match_rev:
                raise RevisionConflictError(
                    RevisionConflictError.MISSING_IF_MATCH, current.rev, current.updated_at
                )
            if current.rev != if_match_rev:
                raise RevisionConflictError(
                    RevisionConflictError.REV_MISMATCH, current.rev, current.updated_at
                )

        document = SnapshotDocument(
            rev=new_rev(),
            updated_at=utc_now_iso(),
            data=data,
            updated_by=updated_by,
        )
        write_json(self.path, document.to_dict())
        logger.info("Saved snapshot revision %s to %s", document.rev, self.path)
        return document
