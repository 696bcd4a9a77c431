"""Announcer settings.

Public API
----------
Settings        - complete configuration (immutable)
SpawnRule       - periodic clock rule
LevelRule       - rule on current field values
NotifyAction    - beep | sound | playfile
SettingsStore   - atomic holder with JSON persistence
"""

from match_announcer.settings.models import (
    BeepAction,
    GlobalConfig,
    LevelRule,
    NotifyAction,
    PlayFileAction,
    Settings,
    SoundAction,
    SpawnRule,
    parse_action,
)
from match_announcer.settings.store import SettingsStore

__all__ = [
    "BeepAction",
    "GlobalConfig",
    "LevelRule",
    "NotifyAction",
    "PlayFileAction",
    "Settings",
    "SettingsStore",
    "SoundAction",
    "SpawnRule",
    "parse_action",
]
