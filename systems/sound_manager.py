from __future__ import annotations
import math
from typing import Dict, List, Tuple
import pygame
from settings import SOUND_DIR

# Effect key -> optional override file under assets/sounds
SOUND_FILES = {
    "dot": "dot.wav",
    "power_pellet": "power_pellet.wav",
    "eat_ghost": "eat_ghost.wav",
    "fruit": "fruit.wav",
    "extra_life": "extra_life.wav",
    "death": "death.wav",
    "level_complete": "level_complete.wav",
    "game_over": "game_over.wav",
}

# Square-wave fallbacks as (frequency Hz, seconds) segments played back to back.
TONES: Dict[str, List[Tuple[float, float]]] = {
    "dot": [(440, 0.05)],
    "power_pellet": [(880, 0.1)],
    "eat_ghost": [(220, 0.2)],
    "fruit": [(660, 0.15)],
    "extra_life": [(400 + i * 100, 0.05) for i in range(5)],
    "death": [(800 - i * 150, 0.1) for i in range(5)],
    "level_complete": [(400 + i * 100, 0.1) for i in range(5)],
    "game_over": [(110, 0.5)],
}

TONE_VOLUME = 0.1

def _square_wave(freq: float, duration: float, rate: int, channels: int, volume: float = TONE_VOLUME) -> bytes:
    n_samples = max(1, int(rate * duration))
    buf = bytearray()
    for i in range(n_samples):
        t = i / rate
        v = 1.0 if (freq * t) % 1.0 < 0.5 else -1.0
        # Exponential decay to a tenth of the start level, like a gain ramp.
        env = volume * math.pow(0.1, i / n_samples)
        sample = max(-32768, min(32767, int(v * env * 32767)))
        buf += sample.to_bytes(2, "little", signed=True) * channels
    return bytes(buf)

def synth_sound(segments: List[Tuple[float, float]]) -> pygame.mixer.Sound:
    """Build a 16-bit sound from tone segments at the mixer's rate and channel count."""
    rate, _, channels = pygame.mixer.get_init()
    data = b"".join(_square_wave(freq, duration, rate, channels) for freq, duration in segments)
    return pygame.mixer.Sound(buffer=data)

class SoundManager:
    """Plays effects when audio is available; otherwise every call is a no-op.

    ``store`` (a ``HighScoreStore``) keeps the player's on/off choice between runs.
    """

    def __init__(self, enabled: bool = True, store=None):
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.available = enabled and pygame.mixer.get_init() is not None
        self.store = store
        self.muted = store is not None and not store.load_sound_enabled()

    @property
    def enabled(self) -> bool:
        return self.available and not self.muted

    def toggle(self) -> bool:
        """Flip the on/off preference and persist it; returns whether sound is now on."""
        self.muted = not self.muted
        if self.store is not None:
            self.store.save_sound_enabled(not self.muted)
        return not self.muted

    def load_sound(self, key: str, filename: str) -> None:
        if not self.available:
            return
        path = SOUND_DIR / filename
        try:
            if path.exists():
                self.sounds[key] = pygame.mixer.Sound(path.as_posix())
            elif key in TONES:
                self.sounds[key] = synth_sound(TONES[key])
        except pygame.error as e:
            print(f"⚠️  Could not load sound {filename}: {e}")

    def load_all(self) -> None:
        for key, filename in SOUND_FILES.items():
            self.load_sound(key, filename)

    def play(self, key: str) -> None:
        sound = self.sounds.get(key)
        if not (self.enabled and sound):
            return
        try:
            sound.play()
        except pygame.error:
            self.available = False
