# app/services/form_storage.py

import json
from typing import Any, Dict

from loguru import logger

from app.core.config import settings
from app.core.session_store import SessionStore, StorageUnavailableError


class FormStorage:
    """
    Load / save / clear the single admission record of one session.

    The record is stored as one JSON object under a fixed key. `save` merges
    the given fields over whatever is already stored (shallow overwrite).
    """

    def __init__(self, store: SessionStore, key: str | None = None):
        self.store = store
        self.key = key or settings.FORM_STORAGE_KEY

    async def load(self) -> Dict[str, Any]:
        # Absence, corruption and an unreachable backend all read as empty
        try:
            return await self._read()
        except StorageUnavailableError:
            logger.warning(f"Session storage unavailable, treating record as empty ({self.store.session_id})")
            return {}

    async def _read(self) -> Dict[str, Any]:
        # Backend failures propagate to the caller
        raw = await self.store.get(self.key)

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable admission record for session {self.store.session_id}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Discarding non-object admission record for session {self.store.session_id}")
            return {}

        return data

    async def save(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        existing = await self._read()
        merged = {**existing, **partial}
        await self.store.set(self.key, json.dumps(merged))
        return merged

    async def clear(self) -> None:
        await self.store.remove(self.key)
