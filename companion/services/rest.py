"""
Rest service for the companion.

Loads a character, resolves a rest against it, and writes the rested
character back as a full record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, Field

from companion.models.character import CharacterData, Project
from companion.models.condition import ConditionType
from companion.models.rest import RestLocation, RestOption, RestType, RoomType
from companion.services.characters import CharacterRepository
from companion.skills.injuries import default_injury_target
from companion.skills.rest import (
    RestEffectsToApply,
    RestValidationError,
    apply_rest_effects,
    build_rest_context,
    default_selection,
    recently_used_option_ids,
    resolve_rest,
)
from companion.skills.rest_catalog import eligible_options

logger = logging.getLogger(__name__)


class RestChoices(BaseModel):
    """The player's answers to the rest dialog, besides the options picked."""

    rest_location: RestLocation | None = None
    room_type: RoomType | None = None
    ration_choices: dict[str, int] = Field(default_factory=dict)
    injury_to_heal: ConditionType | None = None
    project_id: str | None = None
    new_project: Project | None = None


class RestOutcome(BaseModel):
    """Result of taking a rest."""

    success: bool
    effects: RestEffectsToApply | None = None
    error: RestValidationError | None = None
    character: CharacterData | None = None


@dataclass
class RestService:
    """
    Short and long rests for characters in the record store.

    GM custom options and disabled option ids apply to every character.
    """

    characters: CharacterRepository
    custom_options: list[RestOption] = field(default_factory=list)
    disabled_option_ids: set[str] = field(default_factory=set)

    def options_for(self, token_id: str, rest_type: RestType) -> list[RestOption]:
        """Options the character can see for a rest, standard options included."""
        stats = self.characters.require(token_id).character_stats
        return eligible_options(
            rest_type,
            race=stats.race,
            character_class=stats.character_class,
            secondary_race=stats.secondary_race,
            secondary_class=stats.secondary_class,
            custom_options=self.custom_options,
            disabled_option_ids=self.disabled_option_ids,
        )

    def default_selection(self, token_id: str, rest_type: RestType) -> list[str]:
        """Last rest's picks that are still on offer."""
        data = self.characters.require(token_id)
        return default_selection(
            data.character_stats.rest_history,
            rest_type,
            self.options_for(token_id, rest_type),
        )

    def recently_used(self, token_id: str, rest_type: RestType) -> list[str]:
        """Options picked on the previous rest of this type."""
        data = self.characters.require(token_id)
        return recently_used_option_ids(data.character_stats.rest_history, rest_type)

    def default_injury(self, token_id: str) -> ConditionType | None:
        """
        Injury the healing step starts on, the most severe one active.

        Only a starting value for RestChoices.injury_to_heal. A rest that heals
        an injury still needs the player to pass one explicitly.
        """
        data = self.characters.require(token_id)
        return default_injury_target(data.character_stats.conditions)

    def _resolve(
        self,
        data: CharacterData,
        rest_type: RestType,
        selected_option_ids: Iterable[str],
        choices: RestChoices,
    ) -> RestEffectsToApply | RestValidationError:
        context = build_rest_context(
            data,
            rest_location=choices.rest_location,
            room_type=choices.room_type,
            ration_choices=choices.ration_choices,
            injury_to_heal=choices.injury_to_heal,
            project_id=choices.project_id,
            new_project=choices.new_project,
            custom_options=self.custom_options,
            disabled_option_ids=self.disabled_option_ids,
        )
        return resolve_rest(rest_type, selected_option_ids, context)

    def preview(
        self,
        token_id: str,
        rest_type: RestType,
        selected_option_ids: Iterable[str] = (),
        choices: RestChoices | None = None,
    ) -> RestEffectsToApply | RestValidationError:
        """Resolve a rest without writing anything."""
        data = self.characters.require(token_id)
        return self._resolve(data, rest_type, selected_option_ids, choices or RestChoices())

    def take_rest(
        self,
        token_id: str,
        rest_type: RestType,
        selected_option_ids: Iterable[str] = (),
        choices: RestChoices | None = None,
        now: datetime | None = None,
    ) -> RestOutcome:
        """
        Resolve and apply a rest, saving the character on success.

        A validation failure leaves the stored character untouched.
        """
        data = self.characters.require(token_id)
        resolved = self._resolve(data, rest_type, selected_option_ids, choices or RestChoices())

        if isinstance(resolved, RestValidationError):
            logger.info("Rest rejected for %s: %s", token_id, resolved.reason.value)
            return RestOutcome(success=False, error=resolved)

        updated = apply_rest_effects(data, resolved, now=now)
        self.characters.save(token_id, updated)
        logger.info(
            "%s rest taken by %s with %s",
            rest_type.value.capitalize(),
            token_id,
            ", ".join(resolved.selected_option_ids) or "no picks",
        )
        return RestOutcome(success=True, effects=resolved, character=updated)
