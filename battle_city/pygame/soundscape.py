"""Mixer facade: category volumes, mute, SDL driver fallback and stand-in tones."""

from __future__ import annotations

import logging
import math
import os
from array import array
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

# Tried in order when SDL_AUDIODRIVER is unset; None lets SDL pick.
_FALLBACK_DRIVERS: Tuple[Optional[str], ...] = (
    None,
    "pulse",
    "pipewire",
    "alsa",
    "coreaudio",
    "directsound",
    "wasapi",
    "dsp",
    "dummy",
)

# key -> (frequency in Hz, duration in seconds)
_TONES: Dict[str, Tuple[float, float]] = {
    "player_fired": (540.0, 0.12),
    "enemy_fired": (360.0, 0.12),
    "wall_destroyed": (240.0, 0.3),
    "enemy_destroyed": (180.0, 0.35),
    "victory": (720.0, 0.8),
    "defeat": (140.0, 0.8),
    "menu_move": (520.0, 0.08),
    "menu_select": (660.0, 0.12),
}
_DEFAULT_TONE = (440.0, 0.2)


@contextmanager
def _audio_driver(driver: Optional[str]) -> Iterator[None]:
    """Point SDL at ``driver`` for the duration of the block."""
    original = os.environ.get("SDL_AUDIODRIVER")
    if driver is None:
        os.environ.pop("SDL_AUDIODRIVER", None)
    else:
        os.environ["SDL_AUDIODRIVER"] = driver
    try:
        yield
    finally:
        if original is None:
            os.environ.pop("SDL_AUDIODRIVER", None)
        else:
            os.environ["SDL_AUDIODRIVER"] = original


def synthesise_tone(
    frequency: float,
    duration: float,
    *,
    sample_rate: int,
    channels: int,
    amplitude: float = 0.5,
) -> bytes:
    """Render a short enveloped blip as signed 16-bit PCM."""

    total = max(1, int(sample_rate * duration))
    attack = max(1, total // 30)
    release = max(1, total * 3 // 10)
    peak = 32767 * amplitude
    samples = array("h")
    for index in range(total):
        gain = min(1.0, index / attack, (total - index) / release)
        phase = 2.0 * math.pi * frequency * index / sample_rate
        value = 0.8 * math.sin(phase) + 0.2 * math.sin(1.5 * phase)
        samples.extend([int(peak * gain * value)] * channels)
    return samples.tobytes()


class Soundscape:
    """Play named sounds grouped into volume categories."""

    def __init__(
        self,
        base_path: Path,
        *,
        enabled: bool = True,
        frequency: int = 44_100,
        size: int = -16,
        channels: int = 2,
        buffer: int = 512,
    ) -> None:
        self.base_path = Path(base_path)
        self.enabled = enabled
        self.muted = False
        self._mixer_ready = False
        self._registry: Dict[str, pygame.mixer.Sound] = {}
        self._categories: Dict[str, str] = {}
        self._volumes: Dict[str, float] = {"master": 1.0, "effects": 1.0, "ui": 0.8}
        self._missing_assets: set[str] = set()
        self._status_message: Optional[str] = None
        self._active_driver: Optional[str] = None
        self._mixer_params = dict(frequency=frequency, size=size, channels=channels, buffer=buffer)
        if enabled:
            self._open_mixer()

    @property
    def status_message(self) -> Optional[str]:
        return self._status_message

    @property
    def active_driver(self) -> Optional[str]:
        return self._active_driver

    # ------------------------------------------------------------------
    # Loading & playback
    def load(self, key: str, filename: str, *, category: str = "effects") -> None:
        """Register ``filename`` under ``key``, or a generated tone if it is missing."""
        self.ensure_ready()
        if not self._mixer_ready:
            return
        path = self.base_path / filename
        sound: Optional[pygame.mixer.Sound] = None
        if path.is_file():
            try:
                sound = pygame.mixer.Sound(path.as_posix())
            except pygame.error as exc:
                logger.warning("Could not decode %s: %s", path, exc)
        if sound is None:
            sound = self._placeholder(key, category)
            if sound is None:
                return
            if filename not in self._missing_assets:
                self._missing_assets.add(filename)
                logger.warning("Missing audio asset '%s', using placeholder tone.", filename)
        self._registry[key] = sound
        self._categories[key] = category

    def play(self, key: str, *, volume: Optional[float] = None) -> None:
        if self.muted:
            return
        self.ensure_ready()
        sound = self._registry.get(key) if self._mixer_ready else None
        if sound is None:
            return
        category = self._categories.get(key, "effects")
        level = self._volumes["master"] * self._volumes.get(category, 1.0)
        if volume is not None:
            level *= volume
        sound.set_volume(max(0.0, min(1.0, level)))
        sound.play()

    # ------------------------------------------------------------------
    # Volume management
    def set_volume(self, category: str, value: float) -> None:
        self._volumes[category] = max(0.0, min(1.0, value))

    def get_volume(self, category: str) -> float:
        return self._volumes.get(category, 1.0)

    def set_muted(self, flag: bool) -> None:
        self.muted = flag
        if flag and self._mixer_ready and pygame.mixer.get_init():
            pygame.mixer.stop()

    # ------------------------------------------------------------------
    # Mixer bring-up
    def ensure_ready(self) -> None:
        if self.enabled and not self._mixer_ready:
            self._open_mixer()

    def _driver_candidates(self) -> List[Optional[str]]:
        configured = os.environ.get("SDL_AUDIODRIVER")
        return [configured] if configured else list(_FALLBACK_DRIVERS)

    def _open_mixer(self) -> None:
        last_error: Optional[str] = None
        for driver in self._driver_candidates():
            with _audio_driver(driver):
                try:
                    pygame.mixer.quit()
                    pygame.mixer.init(**self._mixer_params)
                except pygame.error as exc:
                    last_error = str(exc)
                    continue
                self._active_driver = driver or os.environ.get("SDL_AUDIODRIVER")
            self._mixer_ready = True
            break

        if not self._mixer_ready:
            self._active_driver = None
            reason = f": {last_error}" if last_error else ""
            self._report(
                f"Audio initialisation failed{reason}. Sound stays off; "
                "connect an audio device or set SDL_AUDIODRIVER."
            )
        elif self._active_driver == "dummy":
            self._report("Audio device unavailable; using the SDL 'dummy' driver (no sound output).")
        else:
            self._status_message = None

    def _report(self, message: str) -> None:
        if message != self._status_message:
            logger.warning(message)
        self._status_message = message

    def _placeholder(self, key: str, category: str) -> Optional[pygame.mixer.Sound]:
        init = pygame.mixer.get_init()
        if not init:
            return None
        sample_rate, size, channels = init
        if abs(size) != 16:
            return None
        frequency, duration = _TONES.get(key, _DEFAULT_TONE)
        data = synthesise_tone(
            frequency,
            duration,
            sample_rate=sample_rate,
            channels=channels,
            amplitude=0.3 if category == "ui" else 0.5,
        )
        try:
            return pygame.mixer.Sound(buffer=data)
        except pygame.error:
            return None


__all__ = ["Soundscape", "synthesise_tone"]
