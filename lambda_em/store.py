# -*- coding: utf-8 -*-
"""Survey store: the persisted, ordered collection of projects.

The collection is serialized as a single JSON document under one key of a
key-value backend. Every write is a whole-collection read-modify-write with
no locking: the last writer wins. A project is addressed by its index in the
collection.

Reading: Backend → bytes → ``validate_json()`` → list[Project]
Writing: list[Project] → ``dump_json()`` → bytes → Backend
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lambda_em.constants import DEFAULT_STORE_KEY
from lambda_em.enums import FileExtension
from lambda_em.errors import CorruptStoreError
from lambda_em.errors import IndexOutOfRangeError
from lambda_em.errors import ProjectNotFoundError
from lambda_em.errors import StoreError
from lambda_em.models import Project

logger = logging.getLogger(__name__)

_PROJECTS_ADAPTER = TypeAdapter(list[Project])


class KeyValueStore(Protocol):
    """Opaque byte store addressed by key."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if the key is absent."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under a key, replacing any previous value."""
        ...


class MemoryKeyValueStore:
    """Dictionary backed store, mostly useful for tests."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)


class FileKeyValueStore:
    """Directory backed store: one ``<key>.json`` file per key.

    Writes go to a temporary file in the same directory which then replaces
    the target, so an interrupted write never leaves a truncated file.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{FileExtension.JSON.value}"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
            Path(tmp_name).replace(self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def serialize_projects(projects: list[Project]) -> bytes:
    """Serialize a project collection to JSON bytes (persisted field names)."""
    return _PROJECTS_ADAPTER.dump_json(projects, by_alias=True, exclude_none=True)


def deserialize_projects(data: bytes | str) -> list[Project]:
    """Parse a project collection.

    Raises:
        CorruptStoreError: If the data is not a valid project collection
    """
    try:
        return _PROJECTS_ADAPTER.validate_json(data)
    except (PydanticValidationError, ValueError) as e:
        raise CorruptStoreError(f"Unreadable project collection: {e}") from e


class SurveyStore:
    """Index-addressed collection of projects on top of a KeyValueStore.

    Example:
        store = SurveyStore(FileKeyValueStore("~/.lambda_em/store"))
        index = store.append(project)
        store.replace_at(index, project)
        project = store.get(index)
    """

    def __init__(self, backend: KeyValueStore, key: str = DEFAULT_STORE_KEY):
        self.backend = backend
        self.key = key

    def __len__(self) -> int:
        return len(self.load_all())

    def load_all(self) -> list[Project]:
        """Read every stored project (empty list if nothing was stored).

        Raises:
            CorruptStoreError: If the stored collection cannot be parsed
        """
        if (data := self.backend.get(self.key)) is None:
            return []
        return deserialize_projects(data)

    def _save(self, projects: list[Project]) -> None:
        data = serialize_projects(projects)
        try:
            self.backend.set(self.key, data)
        except OSError as e:
            raise StoreError(f"Unable to persist `{self.key}`: {e}") from e

    def append(self, project: Project) -> int:
        """Add a project at the end of the collection.

        Returns:
            The index of the new project
        """
        projects = self.load_all()
        projects.append(project)
        self._save(projects)

        index = len(projects) - 1
        logger.info("Stored project `%s` at index %s", project.name, index)
        return index

    def replace_at(self, index: int, project: Project) -> None:
        """Overwrite the project stored at ``index``.

        Raises:
            IndexOutOfRangeError: If no project is stored at ``index``
        """
        projects = self.load_all()
        if not 0 <= index < len(projects):
            raise IndexOutOfRangeError(
                f"Cannot replace project {index}: "
                f"the collection holds {len(projects)} project(s)"
            )
        projects[index] = project
        self._save(projects)
        logger.info("Updated project `%s` at index %s", project.name, index)

    def get(self, index: int) -> Project:
        """Return the project stored at ``index``.

        Raises:
            ProjectNotFoundError: If no project is stored at ``index``
        """
        projects = self.load_all()
        if not 0 <= index < len(projects):
            raise ProjectNotFoundError(f"No project at index {index}")
        return projects[index]
