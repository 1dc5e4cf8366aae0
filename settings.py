from dataclasses import dataclass
from pathlib import Path
import os
from dotenv import load_dotenv
import pygame

BASE_DIR = Path(__file__).resolve().parent
ASSET_DIR = BASE_DIR / "assets"
SOUND_DIR = ASSET_DIR / "sounds"
DATA_DIR = BASE_DIR / "data"

# Load environment variables from .env file
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class StorageConfig:
    """Where the high score and the sound preference live (keys in a small SQLite file)."""
    path: Path = Path(os.getenv("PACMAN_DATA_FILE", str(DATA_DIR / "pacman.db")))
    high_score_key: str = os.getenv("PACMAN_HIGH_SCORE_KEY", "pacmanHighScore")
    sound_key: str = os.getenv("PACMAN_SOUND_KEY", "soundEnabled")


@dataclass
class Settings:
    width: int = 960
    height: int = 720
    fullscreen: bool = _env_flag("PACMAN_FULLSCREEN", "0")
    fps: int = int(os.getenv("PACMAN_FPS", "60"))
    title: str = "Pac-Man"
    bg_color: tuple[int, int, int] = (0, 0, 0)
    tile_size: int = int(os.getenv("PACMAN_TILE_SIZE", "30"))
    sound_enabled: bool = _env_flag("PACMAN_SOUND", "1")

    storage: StorageConfig = None

    def __post_init__(self):
        if self.storage is None:
            self.storage = StorageConfig()

    @property
    def screen_size(self) -> tuple[int, int]:
        return (self.width, self.height)


def ensure_directories() -> None:
    for directory in (ASSET_DIR, SOUND_DIR, DATA_DIR):
        directory.mkdir(parents=True, exist_ok=True)


def init_pygame_window(cfg: Settings) -> pygame.Surface:
    pygame.display.set_caption(cfg.title)
    flags = pygame.FULLSCREEN if cfg.fullscreen else 0
    size = (0, 0) if cfg.fullscreen else cfg.screen_size
    screen = pygame.display.set_mode(size, flags)
    if cfg.fullscreen:
        cfg.width, cfg.height = screen.get_size()
    return screen
