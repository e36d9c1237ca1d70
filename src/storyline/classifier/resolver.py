"""
Entity name resolution for story text.
"""

from typing import Dict, Iterable, Optional

from ..data.models import Entity


UNRESOLVED_ID_LENGTH = 12


class EntityNameResolver:
    """
    id -> display name lookup built once per run.

    Ids that are not in the snapshot fall back to their first 12 characters
    so the story still shows something stable; a missing id reads "Unknown".
    """

    def __init__(self, entities: Iterable[Entity]):
        self._names: Dict[str, str] = {}
        for entity in entities:
            if entity.id and entity.canonical_name:
                self._names[entity.id] = entity.canonical_name

    def __call__(self, entity_id: Optional[str]) -> str:
        return self.resolve(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._names

    def __len__(self) -> int:
        return len(self._names)

    def resolve(self, entity_id: Optional[str]) -> str:
        if entity_id is None:
            return "Unknown"
        name = self._names.get(entity_id)
        if name is not None:
            return name
        return str(entity_id)[:UNRESOLVED_ID_LENGTH]
