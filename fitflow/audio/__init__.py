"""Audio cue package."""

from .sounds import SoundManager, SOUND_NAMES

__all__ = ["SoundManager", "SOUND_NAMES"]
