"""Cue synthesis and playback using numpy + QSoundEffect.

All cues are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
launches are instant.

Sound names
-----------
- ``session_start``    short ascending chime (3 notes)
- ``countdown``        crisp single beep, played at 3, 2 and 1 s left
- ``step_complete``    bright two-note chime when a step ends
- ``rest_start``       soft bell when a rest step begins
- ``session_finished`` celebratory arpeggio at the end of the program
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR

log = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "session_start",
    "countdown",
    "step_complete",
    "rest_start",
    "session_finished",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_start_chime() -> bytes:
    """Session start: 3 ascending notes (C5→E5→G5)."""
    parts: list[np.ndarray] = []
    for freq in (523.25, 659.25, 783.99):
        tone = _sine(freq, 0.12) * 0.6
        env = _make_envelope(len(tone), attack=100, decay=200, sustain_level=0.4, release=300)
        parts.append(tone * env)
        parts.append(_silence(0.03))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_countdown_beep() -> bytes:
    """Countdown: short 880 Hz beep, kept under 150 ms so 1 s cues never overlap."""
    tone = _sine(880.0, 0.09) * 0.5
    env = _make_envelope(len(tone), attack=60, decay=300, sustain_level=0.5, release=900)
    return _to_wav_bytes(np.concatenate([tone * env, _silence(0.04)]))


def _generate_step_chime() -> bytes:
    """Step complete: bright G5→C6 pair, second note held."""
    first = _sine(783.99, 0.10) * 0.5
    first = first * _make_envelope(len(first), attack=60, decay=150, sustain_level=0.3, release=200)
    second = _sine(1046.50, 0.30) * 0.5
    second = second * _make_envelope(len(second), attack=80, decay=300, sustain_level=0.5, release=600)
    return _to_wav_bytes(np.concatenate([first, _silence(0.02), second]))


def _generate_rest_bell() -> bytes:
    """Rest start: soft bell (A4) with a quiet octave overtone."""
    duration = 0.8
    combined = _sine(440.0, duration) * 0.35 + _sine(880.0, duration) * 0.08
    env = _make_envelope(
        len(combined),
        attack=int(SAMPLE_RATE * 0.08),
        decay=int(SAMPLE_RATE * 0.25),
        sustain_level=0.25,
        release=int(SAMPLE_RATE * 0.45),
    )
    return _to_wav_bytes(combined * env)


def _generate_finish_fanfare() -> bytes:
    """Program finished: G4→B4→D5→G5 fanfare, last note held."""
    notes = [392.00, 493.88, 587.33, 783.99]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        if i == len(notes) - 1:
            combined = _sine(freq, 0.5) * 0.55 + _sine(freq * 2, 0.5) * 0.1
            env = _make_envelope(len(combined), attack=100, decay=400, sustain_level=0.5, release=800)
            parts.append(combined * env)
        else:
            tone = _sine(freq, 0.15) * 0.5
            env = _make_envelope(len(tone), attack=80, decay=200, sustain_level=0.4, release=250)
            parts.append(tone * env)
            parts.append(_silence(0.03))
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "session_start": _generate_start_chime,
    "countdown": _generate_countdown_beep,
    "step_complete": _generate_step_chime,
    "rest_start": _generate_rest_bell,
    "session_finished": _generate_finish_fanfare,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages cue synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("countdown")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            log.debug("Unknown sound %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                log.debug("Generated %s", path)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
