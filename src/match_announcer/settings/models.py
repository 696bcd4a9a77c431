"""Pydantic settings models — rules, notify actions and global options."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

_U16 = 65535


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BeepAction(_Frozen):
    type: Literal["beep"] = "beep"
    freq: int = Field(400, gt=0)
    duration_ms: int = Field(100, ge=0, le=_U16)


class SoundAction(_Frozen):
    """Bundled sound, looked up by file name under ``sound/``."""

    type: Literal["sound"] = "sound"
    sound: str


class PlayFileAction(_Frozen):
    """Audio file on the local filesystem, opened when the rule fires."""

    type: Literal["playfile"] = "playfile"
    path: str


NotifyAction = Annotated[
    Union[BeepAction, SoundAction, PlayFileAction],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter[Any] = TypeAdapter(NotifyAction)


def parse_action(data: Any) -> BeepAction | SoundAction | PlayFileAction:
    """Validate a raw ``{"type": ...}`` dict into a notify action.

    Raises
    ------
    pydantic.ValidationError
        If the tag is unknown or a required field is missing.
    """
    return _ACTION_ADAPTER.validate_python(data)


class SpawnRule(_Frozen):
    """Periodic rule: fires *lead_time_sec* before every occurrence.

    Occurrences happen at ``first_occurrence_sec + k * interval_sec`` of match
    clock time.  ``interval_sec == 0`` disables the rule.
    """

    enabled: bool = False
    lead_time_sec: int = Field(0, ge=0, le=_U16)
    first_occurrence_sec: int = Field(0, ge=0, le=_U16)
    interval_sec: int = Field(0, ge=0, le=_U16)
    action: NotifyAction = Field(default_factory=BeepAction)


class LevelRule(_Frozen):
    """Rule derived from comparing current fields rather than clock arithmetic."""

    enabled: bool = False
    lead_time_sec: int = Field(0, ge=0, le=_U16)
    action: NotifyAction = Field(default_factory=BeepAction)


class GlobalConfig(_Frozen):
    volume: float = Field(1.0, ge=0.0)
    """1.0 = 100%."""

    suspend_all: bool = False


def _spawn(first: int, interval: int, lead: int, sound: str) -> SpawnRule:
    return SpawnRule(
        lead_time_sec=lead,
        first_occurrence_sec=first,
        interval_sec=interval,
        action=SoundAction(sound=sound),
    )


def _level(sound: str) -> LevelRule:
    return LevelRule(action=SoundAction(sound=sound))


class Settings(_Frozen):
    """Complete announcer configuration.

    Instances are immutable; a settings change replaces the whole object.
    Serialized with ``by_alias=True`` the global section is named ``global``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    bounty_rune: SpawnRule = Field(
        default_factory=lambda: _spawn(0, 300, 15, "bounty_rune.wav")
    )
    power_rune: SpawnRule = Field(
        default_factory=lambda: _spawn(240, 120, 10, "power_rune.wav")
    )
    tomb_of_knowledge: SpawnRule = Field(
        default_factory=lambda: _spawn(600, 600, 5, "tomb_of_knowledge.wav")
    )
    neutral_items: SpawnRule = Field(
        default_factory=lambda: _spawn(420, 600, 0, "neutral_items.wav")
    )
    observer_wards: LevelRule = Field(default_factory=lambda: _level("observer_ward.wav"))
    buyback_ready: LevelRule = Field(default_factory=lambda: _level("buyback_ready.wav"))
