import wave

import pygame
import pytest

from systems import sound_manager
from systems.sound_manager import SOUND_FILES, TONES, SoundManager, synth_sound


@pytest.fixture
def mixer():
    try:
        pygame.mixer.init()
    except pygame.error as e:
        pytest.skip(f"no audio device: {e}")
    yield pygame.mixer.get_init()
    pygame.mixer.quit()


@pytest.fixture
def empty_sound_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(sound_manager, "SOUND_DIR", tmp_path)
    return tmp_path


class BrokenSound:
    def play(self):
        raise pygame.error("device lost")


class CountingSound:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


def write_wav(path, rate, channels, seconds):
    with wave.open(str(path), "wb") as out:
        out.setnchannels(channels)
        out.setsampwidth(2)
        out.setframerate(rate)
        out.writeframes(b"\x00\x00" * channels * int(rate * seconds))


def test_disabled_without_an_initialised_mixer(empty_sound_dir):
    pygame.mixer.quit()
    manager = SoundManager()
    manager.load_all()
    assert not manager.available
    assert manager.sounds == {}
    manager.play("dot")


def test_disabled_when_asked(mixer, empty_sound_dir):
    manager = SoundManager(enabled=False)
    manager.load_all()
    assert manager.sounds == {}


def test_missing_files_fall_back_to_tones(mixer, empty_sound_dir):
    manager = SoundManager()
    manager.load_all()
    assert set(manager.sounds) == set(SOUND_FILES)
    assert manager.sounds["dot"].get_length() == pytest.approx(0.05, abs=0.01)
    assert manager.sounds["death"].get_length() == pytest.approx(0.5, abs=0.01)


def test_synth_sound_length_matches_segments(mixer):
    sound = synth_sound(TONES["level_complete"])
    assert sound.get_length() == pytest.approx(0.5, abs=0.01)


def test_file_overrides_the_tone(mixer, empty_sound_dir):
    rate, _, channels = mixer
    write_wav(empty_sound_dir / SOUND_FILES["dot"], rate, channels, 0.25)
    manager = SoundManager()
    manager.load_all()
    assert manager.sounds["dot"].get_length() == pytest.approx(0.25, abs=0.01)


def test_unknown_key_without_a_file_is_skipped(mixer, empty_sound_dir):
    manager = SoundManager()
    manager.load_sound("siren", "siren.wav")
    assert "siren" not in manager.sounds
    manager.play("siren")


def test_unreadable_file_is_skipped(mixer, empty_sound_dir, capsys):
    (empty_sound_dir / "siren.wav").write_bytes(b"not a wav")
    manager = SoundManager()
    manager.load_sound("siren", "siren.wav")
    assert "siren" not in manager.sounds
    assert "Could not load sound siren.wav" in capsys.readouterr().out


def test_play_error_disables_playback(mixer, empty_sound_dir):
    manager = SoundManager()
    manager.sounds["dot"] = BrokenSound()
    manager.play("dot")
    assert not manager.available
    assert not manager.enabled
    manager.play("dot")


def test_toggle_persists_between_runs(mixer, store):
    manager = SoundManager(store=store)
    assert manager.enabled
    assert manager.toggle() is False
    assert not manager.enabled
    assert store.load_sound_enabled() is False

    again = SoundManager(store=store)
    assert again.muted
    assert again.toggle() is True
    assert store.load_sound_enabled() is True


def test_muted_play_is_a_no_op(mixer, store):
    store.save_sound_enabled(False)
    manager = SoundManager(store=store)
    counting = CountingSound()
    manager.sounds["dot"] = counting
    manager.play("dot")
    assert counting.plays == 0
    manager.toggle()
    manager.play("dot")
    assert counting.plays == 1
