"""Character record access over the shared record store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from companion.config import CompanionSettings
from companion.db.interfaces import RecordStore
from companion.models.character import CharacterData, create_character


class CharacterNotFoundError(LookupError):
    """No character record exists for a token."""

    def __init__(self, token_id: str) -> None:
        super().__init__(f"No character data for token {token_id}")
        self.token_id = token_id


@dataclass
class CharacterRepository:
    """
    Loads and saves whole CharacterData snapshots keyed by token id.

    Writes always replace the full record.
    """

    store: RecordStore
    namespace: str = "companion"
    max_exhaustion: int = 10

    @classmethod
    def from_settings(cls, store: RecordStore, settings: CompanionSettings) -> CharacterRepository:
        return cls(
            store=store,
            namespace=settings.record_namespace,
            max_exhaustion=settings.max_exhaustion,
        )

    @property
    def prefix(self) -> str:
        return f"{self.namespace}/characters/"

    def key_for(self, token_id: str) -> str:
        return f"{self.prefix}{token_id}"

    def get(self, token_id: str) -> CharacterData | None:
        """Get a character by token id, or None if absent."""
        record = self.store.get(self.key_for(token_id))
        if record is None:
            return None
        return CharacterData.model_validate(record)

    def require(self, token_id: str) -> CharacterData:
        """Get a character by token id, raising if absent."""
        data = self.get(token_id)
        if data is None:
            raise CharacterNotFoundError(token_id)
        return data

    def save(self, token_id: str, data: CharacterData) -> None:
        """Replace a character's record."""
        self.store.put(self.key_for(token_id), data.model_dump(mode="json"))

    def create(self, token_id: str, **kwargs: Any) -> CharacterData:
        """
        Create and save a fresh character on a token.

        Keyword arguments go to create_character; the exhaustion track
        length comes from the repository unless given.
        """
        kwargs.setdefault("max_exhaustion", self.max_exhaustion)
        data = create_character(**kwargs)
        self.save(token_id, data)
        return data

    def delete(self, token_id: str) -> bool:
        return self.store.delete(self.key_for(token_id))

    def token_ids(self) -> list[str]:
        """Token ids with a character record, sorted."""
        return [key[len(self.prefix) :] for key in self.store.keys(self.prefix)]

    def list(self) -> dict[str, CharacterData]:
        """All characters keyed by token id."""
        characters: dict[str, CharacterData] = {}
        for token_id in self.token_ids():
            data = self.get(token_id)
            if data is not None:
                characters[token_id] = data
        return characters
