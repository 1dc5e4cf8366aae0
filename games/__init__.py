from __future__ import annotations
from typing import Callable, Dict, Type
import pygame
from settings import Settings
from systems.sound_manager import SoundManager

class BaseGame:
    """A screen the app can hand events and frames to until it posts ``back_to_menu``."""

    name: str = "base"
    title: str = "Game"

    def __init__(self, screen: pygame.Surface, cfg: Settings, sounds: SoundManager):
        self.screen = screen
        self.cfg = cfg
        self.sounds = sounds
        self.running = False

    def start(self) -> None:
        self.running = True
        self.reset()

    def stop(self) -> None:
        self.running = False

    def resize(self, screen: pygame.Surface) -> None:
        self.screen = screen

    def reset(self) -> None:
        ...

    def handle_event(self, event: pygame.event.Event) -> None:
        ...

    def update(self, dt: float) -> None:
        ...

    def draw(self) -> None:
        ...

GAME_REGISTRY: Dict[str, Type[BaseGame]] = {}

def register_game(key: str) -> Callable[[Type[BaseGame]], Type[BaseGame]]:
    def wrapper(cls: Type[BaseGame]) -> Type[BaseGame]:
        GAME_REGISTRY[key] = cls
        cls.name = key
        return cls
    return wrapper

# Importing the variants fills the registry.
from . import pac_man  # noqa: F401
