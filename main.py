from __future__ import annotations
import sys
import pygame
from settings import Settings, ensure_directories, init_pygame_window
from highscore import HighScoreStore
from systems.scoring import format_score
from systems.controls import SOUND_KEY
from systems.sound_manager import SoundManager
from games import GAME_REGISTRY, BaseGame

MENU_OPTIONS = ["pac_man", "pac_man_classic", "quit"]
FULLSCREEN_KEY = pygame.K_F11

BUTTON_FILL = (35, 40, 80)
BUTTON_FILL_SELECTED = (60, 70, 120)
BUTTON_BORDER = (120, 130, 180)
BUTTON_BORDER_SELECTED = (255, 255, 255)

class PacmanApp:
    def __init__(self):
        ensure_directories()
        pygame.init()
        self.cfg = Settings()
        self.screen = init_pygame_window(self.cfg)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 28)
        self.small_font = pygame.font.SysFont("arial", 20)
        self.title_font = pygame.font.SysFont("arial", 56, bold=True)
        self.high_scores = HighScoreStore(self.cfg.storage)
        self.sounds = SoundManager(enabled=self._init_audio(), store=self.high_scores)
        self.sounds.load_all()
        self.menu_high_score = self.high_scores.load()
        self.state = "menu"
        self.menu_index = 0
        self.active_game: BaseGame | None = None
        self.buttons: list[tuple[str, pygame.Rect]] = []
        self.windowed_size = self.cfg.screen_size

    def _init_audio(self) -> bool:
        if not self.cfg.sound_enabled:
            return False
        try:
            pygame.mixer.init()
        except pygame.error as e:
            print(f"⚠️  Audio unavailable, continuing without sound: {e}")
            return False
        return True

    def run(self) -> None:
        try:
            running = True
            while running:
                dt = self.clock.tick(self.cfg.fps) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                        break
                    self.handle_event(event)
                else:
                    self.update(dt)
                    self.draw()
                    pygame.display.flip()
        finally:
            pygame.quit()

    # ----- Events -----
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN and event.key == FULLSCREEN_KEY:
            self.toggle_fullscreen()
            return
        if event.type == pygame.KEYDOWN and event.key == SOUND_KEY:
            self.sounds.toggle()
            return
        if self.state == "menu":
            self.handle_menu_event(event)
            return
        if not self.active_game:
            return
        if event.type == pygame.USEREVENT and getattr(event, "action", None) == "back_to_menu":
            self.back_to_menu()
            return
        self.active_game.handle_event(event)

    def handle_menu_event(self, event: pygame.event.Event) -> None:
        if not self.buttons:
            self.layout_menu()
        if event.type == pygame.MOUSEMOTION:
            hit = self.button_at(event.pos)
            if hit is not None:
                self.menu_index = hit
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            hit = self.button_at(event.pos)
            if hit is not None:
                self.select(MENU_OPTIONS[hit])
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_UP, pygame.K_w):
                self.menu_index = (self.menu_index - 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self.menu_index = (self.menu_index + 1) % len(MENU_OPTIONS)
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
                self.select(MENU_OPTIONS[self.menu_index])
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))

    def button_at(self, pos) -> int | None:
        for idx, (_, rect) in enumerate(self.buttons):
            if rect.collidepoint(pos):
                return idx
        return None

    def select(self, option: str) -> None:
        if option == "quit":
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return
        game_cls = GAME_REGISTRY[option]
        self.active_game = game_cls(self.screen, self.cfg, self.sounds)
        self.active_game.start()
        self.state = "game"

    def back_to_menu(self) -> None:
        self.active_game.stop()
        self.active_game = None
        self.menu_high_score = self.high_scores.load()
        self.state = "menu"

    # ----- Frame -----
    def update(self, dt: float) -> None:
        if self.state == "game" and self.active_game:
            self.active_game.update(dt)

    def draw(self) -> None:
        self.screen.fill(self.cfg.bg_color)
        if self.state == "game" and self.active_game:
            self.active_game.draw()
        else:
            self.draw_menu()

    # ----- Display mode -----
    def toggle_fullscreen(self) -> None:
        if self.cfg.fullscreen:
            self.cfg.fullscreen = False
            self.cfg.width, self.cfg.height = self.windowed_size
        else:
            self.windowed_size = self.cfg.screen_size
            self.cfg.fullscreen = True
        self.screen = init_pygame_window(self.cfg)
        self.buttons.clear()
        if self.active_game:
            self.active_game.resize(self.screen)

    # ----- Menu -----
    def layout_menu(self) -> None:
        self.buttons.clear()
        width, height = 340, 56
        top = self.cfg.height // 2 - 40
        for idx, option in enumerate(MENU_OPTIONS):
            rect = pygame.Rect(0, 0, width, height)
            rect.center = (self.cfg.width // 2, top + idx * (height + 14))
            self.buttons.append((option, rect))

    def label_for(self, option: str) -> str:
        game_cls = GAME_REGISTRY.get(option)
        return game_cls.title if game_cls else option.title()

    def draw_menu(self) -> None:
        self.layout_menu()
        cx = self.cfg.width // 2
        title = self.title_font.render(self.cfg.title.upper(), True, (255, 255, 0))
        self.screen.blit(title, (cx - title.get_width() // 2, 90))
        best = self.small_font.render(f"HIGH SCORE {format_score(self.menu_high_score)}", True, (255, 215, 0))
        self.screen.blit(best, (cx - best.get_width() // 2, 90 + title.get_height() + 10))
        sound = self.small_font.render(f"SOUND {'ON' if self.sounds.enabled else 'OFF'}", True, (150, 150, 190))
        self.screen.blit(sound, (cx - sound.get_width() // 2, 90 + title.get_height() + 36))

        for idx, (option, rect) in enumerate(self.buttons):
            selected = idx == self.menu_index
            pygame.draw.rect(self.screen, BUTTON_FILL_SELECTED if selected else BUTTON_FILL, rect, border_radius=8)
            pygame.draw.rect(
                self.screen,
                BUTTON_BORDER_SELECTED if selected else BUTTON_BORDER,
                rect,
                width=2,
                border_radius=8,
            )
            label = self.font.render(self.label_for(option), True, (255, 255, 255))
            self.screen.blit(label, label.get_rect(center=rect.center))

        hint = self.small_font.render("Arrows/WASD move  Space/P pause  Esc menu  M sound  F11 fullscreen", True, (150, 150, 190))
        self.screen.blit(hint, (cx - hint.get_width() // 2, self.cfg.height - 50))

def main() -> None:
    PacmanApp().run()
    sys.exit(0)

if __name__ == "__main__":
    main()
