"""JSON-backed catalog of word groups."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..domain.entries import EntryCatalog, Group, WordEntry

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """The catalog file is missing or malformed."""


class CatalogRepository:
    def __init__(self, path: str, logger_instance=None) -> None:
        self.path = str(path or "").strip()
        self.logger = logger_instance or logger

    def load(self) -> EntryCatalog:
        if not self.path:
            raise CatalogError("Catalog path is not configured.")
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise CatalogError(f"Invalid JSON in {self.path}: {exc.msg}") from exc
        except FileNotFoundError as exc:
            raise CatalogError(f"Catalog file not found: {self.path}") from exc
        except OSError as exc:
            raise CatalogError(f"Failed to read catalog file: {exc}") from exc
        catalog = self.parse_catalog(payload)
        self.logger.info(
            "Catalog loaded: groups=%s entries=%s path=%s",
            len(catalog),
            sum(len(group) for group in catalog),
            self.path,
        )
        return catalog

    def parse_catalog(self, payload: Any) -> EntryCatalog:
        if not isinstance(payload, dict) or not isinstance(payload.get("groups"), list):
            raise CatalogError("Catalog must be an object with a 'groups' list.")
        groups: list[Group] = []
        for position, raw_group in enumerate(payload["groups"]):
            group = self._parse_group(raw_group, position)
            if group is not None:
                groups.append(group)
        if not groups:
            raise CatalogError("Catalog contains no groups.")
        try:
            return EntryCatalog(groups)
        except ValueError as exc:
            raise CatalogError(str(exc)) from exc

    def _parse_group(self, raw_group: Any, position: int) -> Group | None:
        if not isinstance(raw_group, dict):
            self.logger.warning("Skipping group #%s: not an object", position)
            return None
        try:
            group_id = int(raw_group.get("id"))
        except (TypeError, ValueError):
            self.logger.warning("Skipping group #%s: missing or invalid id", position)
            return None
        name = str(raw_group.get("name") or f"Group {group_id}").strip()
        raw_words = raw_group.get("words")
        if not isinstance(raw_words, list):
            raw_words = []
        entries: list[WordEntry] = []
        for raw_entry in raw_words:
            entry = self._parse_entry(raw_entry)
            if entry is None:
                self.logger.warning("Skipping entry without a word in group %s", group_id)
                continue
            entries.append(entry)
        return Group(id=group_id, name=name, entries=tuple(entries))

    @staticmethod
    def _parse_entry(raw_entry: Any) -> WordEntry | None:
        if not isinstance(raw_entry, dict):
            return None
        word = str(raw_entry.get("word") or "").strip()
        if not word:
            return None
        return WordEntry(
            word=word,
            synonym=str(raw_entry.get("synonym") or "").strip(),
            sentence=str(raw_entry.get("sentence") or "").strip(),
        )
