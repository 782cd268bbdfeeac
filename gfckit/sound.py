"""Sound loading and channel-based playback over a pluggable audio backend."""

from __future__ import annotations

import abc
import enum
import math
import os
import threading
from functools import lru_cache
from typing import Any, Dict, Optional, Set, Tuple

import pygame

DEFAULT_FREQUENCY = 44100
DEFAULT_FORMAT = -16  # signed 16-bit samples
DEFAULT_CHANNELS = 2
DEFAULT_CHUNKSIZE = 2048
MAX_VOLUME = 128


class PlayMode(enum.Enum):
    """How a player reacts when asked to play while something is playing."""

    TERMINATE_AND_PLAY = enum.auto()  # always stop the current sound and play
    PLAY_IF_IDLE = enum.auto()  # play only when nothing is playing
    PLAY_IF_NEW = enum.auto()  # do not restart the sound that is playing now
    PLAY_ONCE = enum.auto()  # do not replay the sound played last


class AudioBackend(abc.ABC):
    """The mixer operations that sounds and players rely on."""

    @abc.abstractmethod
    def open(self, frequency: int, format: int, channels: int, chunksize: int) -> None:
        """Open the audio device."""

    @abc.abstractmethod
    def close(self) -> None:
        """Close the audio device."""

    @abc.abstractmethod
    def load(self, path: str) -> Any:
        """Load a sound file and return a handle to it."""

    @abc.abstractmethod
    def free(self, music: Any) -> None:
        """Release a loaded sound."""

    @abc.abstractmethod
    def play(self, music: Any, repeats: int, fade_in: int) -> int:
        """Play a sound on a free channel; return the channel, or -1 if none is free."""

    @abc.abstractmethod
    def halt(self, channel: int) -> None:
        """Stop a channel at once."""

    @abc.abstractmethod
    def fade_out(self, channel: int, ms: int) -> None:
        """Fade a channel out over the given time."""

    @abc.abstractmethod
    def expire(self, channel: int, ms: int) -> None:
        """Stop a channel after the given time."""

    @abc.abstractmethod
    def is_playing(self, channel: int) -> bool:
        """Whether the channel is playing (paused counts as playing)."""

    @abc.abstractmethod
    def pause(self, channel: int) -> None:
        """Pause a channel."""

    @abc.abstractmethod
    def resume(self, channel: int) -> None:
        """Resume a paused channel."""

    @abc.abstractmethod
    def is_paused(self, channel: int) -> bool:
        """Whether the channel is paused; for -1, whether any channel is."""

    @abc.abstractmethod
    def set_volume(self, channel: int, level: int) -> None:
        """Set a channel's volume, 0 to MAX_VOLUME."""

    @abc.abstractmethod
    def set_position(self, channel: int, angle: int, distance: int) -> None:
        """Place a channel's sound at an angle (degrees) and distance (0-255)."""


class PygameAudioBackend(AudioBackend):
    """Backend driving the pygame mixer."""

    def __init__(self) -> None:
        self._paused: Set[int] = set()
        self._timers: Dict[int, threading.Timer] = {}

    def open(self, frequency: int, format: int, channels: int, chunksize: int) -> None:
        pygame.mixer.init(frequency=frequency, size=format, channels=channels, buffer=chunksize)

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._paused.clear()
        pygame.mixer.quit()

    def load(self, path: str) -> Any:
        return pygame.mixer.Sound(path)

    def free(self, music: Any) -> None:
        music.stop()

    def _channel(self, channel: int) -> Optional[Any]:
        if 0 <= channel < pygame.mixer.get_num_channels():
            return pygame.mixer.Channel(channel)
        return None

    def _forget(self, channel: int) -> None:
        self._paused.discard(channel)
        timer = self._timers.pop(channel, None)
        if timer is not None:
            timer.cancel()

    def play(self, music: Any, repeats: int, fade_in: int) -> int:
        for index in range(pygame.mixer.get_num_channels()):
            channel = pygame.mixer.Channel(index)
            if not channel.get_busy():
                self._forget(index)
                channel.play(music, loops=repeats, fade_ms=max(fade_in, 0))
                return index
        return -1

    def halt(self, channel: int) -> None:
        ch = self._channel(channel)
        if ch is not None:
            ch.stop()
            self._forget(channel)

    def fade_out(self, channel: int, ms: int) -> None:
        ch = self._channel(channel)
        if ch is not None:
            ch.fadeout(ms)

    def expire(self, channel: int, ms: int) -> None:
        ch = self._channel(channel)
        if ch is None:
            return
        previous = self._timers.pop(channel, None)
        if previous is not None:
            previous.cancel()
        if ms > 0:
            timer = threading.Timer(ms / 1000.0, ch.stop)
            timer.daemon = True
            self._timers[channel] = timer
            timer.start()

    def is_playing(self, channel: int) -> bool:
        ch = self._channel(channel)
        return bool(ch is not None and ch.get_busy())

    def pause(self, channel: int) -> None:
        ch = self._channel(channel)
        if ch is not None:
            ch.pause()
            self._paused.add(channel)

    def resume(self, channel: int) -> None:
        ch = self._channel(channel)
        if ch is not None:
            ch.unpause()
            self._paused.discard(channel)

    def is_paused(self, channel: int) -> bool:
        if channel < 0:
            return bool(self._paused)
        return channel in self._paused

    def set_volume(self, channel: int, level: int) -> None:
        ch = self._channel(channel)
        if ch is not None:
            ch.set_volume(max(0, min(level, MAX_VOLUME)) / MAX_VOLUME)

    def set_position(self, channel: int, angle: int, distance: int) -> None:
        ch = self._channel(channel)
        if ch is None:
            return
        attenuation = max(0, 255 - distance) / 255.0
        pan = math.sin(math.radians(angle))
        left = min(1.0, 1.0 - pan) * attenuation
        right = min(1.0, 1.0 + pan) * attenuation
        ch.set_volume(left, right)


class AudioSystem:
    """Shared audio device: opened by its first user, closed by its last.

    It also caches loaded sound files and remembers which player owns
    each channel.
    """

    search_dirs: Tuple[str, ...] = ("", "sounds")

    def __init__(self, backend: Optional[AudioBackend] = None) -> None:
        self.backend = backend if backend is not None else PygameAudioBackend()
        self.frequency = DEFAULT_FREQUENCY
        self.format = DEFAULT_FORMAT
        self.channels = DEFAULT_CHANNELS
        self.chunksize = DEFAULT_CHUNKSIZE
        self._users = 0
        self._cache: Dict[str, Any] = {}
        self._owners: Dict[int, "SoundPlayer"] = {}

    @property
    def is_open(self) -> bool:
        return self._users > 0

    def _open(self) -> None:
        self.backend.open(self.frequency, self.format, self.channels, self.chunksize)

    def acquire(self) -> None:
        """Register a user, opening the device for the first one."""
        if self._users == 0:
            self._open()
        self._users += 1

    def release(self) -> None:
        """Unregister a user, closing the device after the last one."""
        if self._users == 0:
            raise RuntimeError("audio released more times than it was acquired")
        self._users -= 1
        if self._users == 0:
            for music in self._cache.values():
                self.backend.free(music)
            self._cache.clear()
            self._owners.clear()
            self.backend.close()

    def set_params(self, frequency: int, format: int, channels: int, chunksize: int) -> None:
        """Change the device settings, reopening the device if it is open."""
        self.frequency = frequency
        self.format = format
        self.channels = channels
        self.chunksize = chunksize
        if self._users:
            self.backend.close()
            self._open()

    def _load(self, filename: str) -> Any:
        cached = self._cache.get(filename)
        if cached is not None:
            return cached
        for directory in self.search_dirs:
            path = os.path.join(directory, filename) if directory else filename
            if os.path.isfile(path):
                music = self.backend.load(path)
                self._cache[filename] = music
                return music
        raise FileNotFoundError(f"sound file not found: {filename}")


@lru_cache(maxsize=None)
def _default_audio() -> AudioSystem:
    return AudioSystem()


class Sound:
    """A reference to a loaded sound; loaded data is shared through the cache."""

    def __init__(
        self,
        audio: Optional[AudioSystem] = None,
        filename: Optional[str] = None,
        music: Any = None,
    ) -> None:
        self._audio = audio if audio is not None else _default_audio()
        self._audio.acquire()
        self._closed = False
        self.music: Any = None
        try:
            if filename is not None:
                self.load(filename)
            elif music is not None:
                self.attach(music)
        except BaseException:
            self.close()
            raise

    def load(self, filename: str) -> None:
        self.unload()
        self.music = self._audio._load(filename)

    def unload(self) -> None:
        # The data itself stays in the shared cache.
        self.music = None

    def attach(self, music: Any) -> None:
        self.unload()
        self.music = music

    def detach(self) -> None:
        self.unload()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.unload()
        self._audio.release()

    def __enter__(self) -> Sound:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _same_music(a: Optional[Sound], b: Optional[Sound]) -> bool:
    return a is not None and b is not None and a.music is b.music


class SoundPlayer:
    """Plays one sound at a time on a mixer channel."""

    def __init__(
        self,
        audio: Optional[AudioSystem] = None,
        mode: PlayMode = PlayMode.TERMINATE_AND_PLAY,
    ) -> None:
        self._audio = audio if audio is not None else _default_audio()
        self._audio.acquire()
        self.mode = mode
        self._channel = -1
        self._sound: Optional[Sound] = None
        self._owned = False
        self._closed = False

    @property
    def channel(self) -> int:
        return self._channel

    def _drop_owned(self) -> None:
        if self._owned and self._sound is not None:
            self._sound.close()
        self._owned = False

    def play(self, sound: Optional[Sound], repeats: int = 0, fade_in: int = 0) -> None:
        """Play a sound, subject to the player's mode; None just stops."""
        now_playing = self.is_playing()
        last_playing = self.last_playing()

        if self.mode is PlayMode.PLAY_IF_IDLE and now_playing is not None:
            return
        if self.mode in (PlayMode.PLAY_IF_IDLE, PlayMode.PLAY_IF_NEW) and _same_music(
            sound, now_playing
        ):
            return
        if self.mode is PlayMode.PLAY_ONCE and _same_music(sound, last_playing):
            return

        backend = self._audio.backend
        if now_playing is not None:
            if fade_in:
                backend.fade_out(self._channel, fade_in)
            else:
                backend.halt(self._channel)

        self._drop_owned()
        self._sound = sound
        if sound is None or sound.music is None:
            return

        self._channel = backend.play(sound.music, repeats, fade_in)
        if self._channel >= 0:
            self._audio._owners[self._channel] = self

    def play_file(self, filename: str, repeats: int = 0, fade_in: int = 0) -> None:
        """Load a file and play it; the player owns the loaded sound."""
        sound = Sound(self._audio, filename)
        self.play(sound, repeats, fade_in)
        if self._sound is sound:
            self._owned = True
        else:
            sound.close()

    def is_playing(self) -> Optional[Sound]:
        """The sound playing now, or None."""
        if (
            self._channel >= 0
            and self._sound is not None
            and self._audio._owners.get(self._channel) is self
            and self._audio.backend.is_playing(self._channel)
        ):
            return self._sound
        self._channel = -1
        return None

    def last_playing(self) -> Optional[Sound]:
        """The sound played last, whether or not it still plays."""
        return self._sound

    def pause(self) -> None:
        if self.is_playing() is not None:
            self._audio.backend.pause(self._channel)

    def resume(self) -> None:
        if self.is_playing() is not None:
            self._audio.backend.resume(self._channel)

    def is_paused(self) -> bool:
        return self._audio.backend.is_paused(self._channel)

    def set_volume(self, volume: float) -> None:
        """Set the volume as a fraction of full volume."""
        if self.is_playing() is not None:
            self._audio.backend.set_volume(self._channel, int(volume * MAX_VOLUME))

    def stop(self) -> None:
        if self.is_playing() is not None:
            self._audio.backend.halt(self._channel)
        self._channel = -1

    def fade_out(self, ms: int) -> None:
        if self.is_playing() is not None:
            self._audio.backend.fade_out(self._channel, ms)

    def expire(self, ms: int) -> None:
        if self.is_playing() is not None:
            self._audio.backend.expire(self._channel, ms)

    def set_position(self, angle: int, distance: int) -> None:
        self._audio.backend.set_position(self._channel, angle, distance)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._drop_owned()
        self._sound = None
        if self._audio._owners.get(self._channel) is self:
            del self._audio._owners[self._channel]
        self._channel = -1
        self._audio.release()

    def __enter__(self) -> SoundPlayer:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()