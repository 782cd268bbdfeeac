import pytest

from gfckit.sound import (
    DEFAULT_CHANNELS,
    DEFAULT_CHUNKSIZE,
    DEFAULT_FORMAT,
    DEFAULT_FREQUENCY,
    MAX_VOLUME,
    AudioBackend,
    AudioSystem,
    PlayMode,
    Sound,
    SoundPlayer,
)


class FakeBackend(AudioBackend):
    def __init__(self):
        self.calls = []
        self.playing = set()
        self.paused = set()
        self.volumes = {}
        self.next_channel = 0

    def names(self, name):
        return [c for c in self.calls if c[0] == name]

    def open(self, frequency, format, channels, chunksize):
        self.calls.append(("open", frequency, format, channels, chunksize))

    def close(self):
        self.calls.append(("close",))

    def load(self, path):
        self.calls.append(("load", path))
        return ("music", path)

    def free(self, music):
        self.calls.append(("free", music))

    def play(self, music, repeats, fade_in):
        channel = self.next_channel
        self.next_channel += 1
        self.playing.add(channel)
        self.calls.append(("play", music, repeats, fade_in, channel))
        return channel

    def halt(self, channel):
        self.playing.discard(channel)
        self.calls.append(("halt", channel))

    def fade_out(self, channel, ms):
        self.calls.append(("fade_out", channel, ms))

    def expire(self, channel, ms):
        self.calls.append(("expire", channel, ms))

    def is_playing(self, channel):
        return channel in self.playing

    def pause(self, channel):
        self.paused.add(channel)

    def resume(self, channel):
        self.paused.discard(channel)

    def is_paused(self, channel):
        return channel in self.paused

    def set_volume(self, channel, level):
        self.volumes[channel] = level

    def set_position(self, channel, angle, distance):
        self.calls.append(("position", channel, angle, distance))


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def audio(backend):
    return AudioSystem(backend)


def test_acquire_opens_once_with_defaults(audio, backend):
    audio.acquire()
    audio.acquire()
    assert audio.is_open
    assert backend.names("open") == [
        ("open", DEFAULT_FREQUENCY, DEFAULT_FORMAT, DEFAULT_CHANNELS, DEFAULT_CHUNKSIZE)
    ]
    assert DEFAULT_FREQUENCY == 44100
    assert DEFAULT_CHUNKSIZE == 2048


def test_release_closes_after_last_user(audio, backend):
    audio.acquire()
    audio.acquire()
    audio.release()
    assert backend.names("close") == []
    audio.release()
    assert backend.names("close") == [("close",)]
    assert not audio.is_open


def test_release_without_acquire_raises(audio):
    with pytest.raises(RuntimeError):
        audio.release()


def test_set_params_reopens_when_open(audio, backend):
    audio.acquire()
    audio.set_params(22050, 8, 1, 512)
    assert audio.is_open
    assert backend.calls[-2:] == [("close",), ("open", 22050, 8, 1, 512)]


def test_set_params_when_closed_applies_on_next_open(audio, backend):
    audio.set_params(22050, 8, 1, 512)
    assert not audio.is_open
    assert backend.calls == []
    audio.acquire()
    assert audio.is_open
    assert backend.calls == [("open", 22050, 8, 1, 512)]


def test_sound_load_is_cached(audio, backend, tmp_path):
    path = tmp_path / "beep.wav"
    path.write_bytes(b"RIFF")
    first = Sound(audio, str(path))
    second = Sound(audio, str(path))
    assert first.music is second.music
    assert len(backend.names("load")) == 1


def test_missing_file_raises_and_releases(audio, backend, tmp_path):
    with pytest.raises(FileNotFoundError):
        Sound(audio, str(tmp_path / "nothing.wav"))
    assert not audio.is_open
    assert backend.names("close") == [("close",)]


def test_sound_attach_detach_and_close(audio):
    music = object()
    with Sound(audio, music=music) as snd:
        assert snd.music is music
        snd.detach()
        assert snd.music is None
    assert not audio.is_open


def test_terminate_and_play_restarts(audio, backend):
    player = SoundPlayer(audio)
    snd = Sound(audio, music=object())
    player.play(snd)
    first = player.channel
    player.play(snd)
    assert ("halt", first) in backend.calls
    assert len(backend.names("play")) == 2
    assert player.is_playing() is snd


def test_play_if_idle_ignores_while_playing(audio, backend):
    player = SoundPlayer(audio, PlayMode.PLAY_IF_IDLE)
    a = Sound(audio, music=object())
    b = Sound(audio, music=object())
    player.play(a)
    player.play(b)
    assert player.last_playing() is a
    backend.playing.clear()
    player.play(b)
    assert player.is_playing() is b


def test_play_if_new_skips_same_music(audio, backend):
    player = SoundPlayer(audio, PlayMode.PLAY_IF_NEW)
    music = object()
    a = Sound(audio, music=music)
    same = Sound(audio, music=music)
    other = Sound(audio, music=object())
    player.play(a)
    player.play(same)
    assert len(backend.names("play")) == 1
    player.play(other)
    assert len(backend.names("play")) == 2
    assert player.is_playing() is other


def test_play_once_skips_even_when_finished(audio, backend):
    player = SoundPlayer(audio, PlayMode.PLAY_ONCE)
    snd = Sound(audio, music=object())
    player.play(snd)
    backend.playing.clear()
    player.play(snd)
    assert len(backend.names("play")) == 1
    assert player.is_playing() is None


def test_fade_in_fades_out_previous(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    first = player.channel
    player.play(Sound(audio, music=object()), 2, 300)
    assert ("fade_out", first, 300) in backend.calls
    assert backend.names("play")[-1][2:4] == (2, 300)


def test_finished_sound_is_not_playing_but_last(audio, backend):
    player = SoundPlayer(audio)
    snd = Sound(audio, music=object())
    player.play(snd)
    backend.playing.clear()
    assert player.is_playing() is None
    assert player.channel == -1
    assert player.last_playing() is snd


def test_stop_halts(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    channel = player.channel
    player.stop()
    assert backend.calls[-1] == ("halt", channel)
    assert player.is_playing() is None


def test_volume_scaled(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    player.set_volume(0.5)
    assert backend.volumes[player.channel] == MAX_VOLUME // 2


def test_pause_and_resume(audio):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    player.pause()
    assert player.is_paused()
    player.resume()
    assert not player.is_paused()


def test_fade_out_and_expire_forward(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    channel = player.channel
    player.fade_out(100)
    player.expire(250)
    assert backend.calls[-2:] == [("fade_out", channel, 100), ("expire", channel, 250)]


def test_nothing_happens_when_idle(audio, backend):
    player = SoundPlayer(audio)
    player.set_volume(1.0)
    player.fade_out(100)
    assert player.is_playing() is None
    assert player.channel == -1
    assert backend.volumes == {}
    assert backend.names("fade_out") == []


def test_channel_taken_by_other_player(audio, backend):
    first = SoundPlayer(audio)
    second = SoundPlayer(audio)
    first.play(Sound(audio, music=object()))
    backend.next_channel = first.channel
    second.play(Sound(audio, music=object()))
    assert second.channel == first.channel
    assert first.is_playing() is None
    assert second.is_playing() is not None


def test_play_none_stops_current(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    channel = player.channel
    player.play(None)
    assert ("halt", channel) in backend.calls
    assert player.last_playing() is None


def test_owned_sound_closed_when_replaced(audio, tmp_path):
    path = tmp_path / "a.wav"
    path.write_bytes(b"RIFF")
    player = SoundPlayer(audio)
    player.play_file(str(path))
    owned = player.last_playing()
    assert owned.music is not None
    player.play(Sound(audio, music=object()))
    assert owned.music is None


def test_rejected_play_file_keeps_current(audio, backend, tmp_path):
    path = tmp_path / "a.wav"
    path.write_bytes(b"RIFF")
    player = SoundPlayer(audio, PlayMode.PLAY_IF_IDLE)
    current = Sound(audio, music=object())
    player.play(current)
    player.play_file(str(path))
    assert player.last_playing() is current
    assert len(backend.names("play")) == 1


def test_set_position_forwards(audio, backend):
    player = SoundPlayer(audio)
    player.play(Sound(audio, music=object()))
    player.set_position(90, 10)
    assert backend.calls[-1] == ("position", player.channel, 90, 10)


def test_player_context_releases_audio(audio, backend):
    with SoundPlayer(audio) as player:
        assert audio.is_open
        player.play(Sound(audio, music=object()))
    assert player.channel == -1
    assert backend.names("close") == []
    assert len(backend.names("open")) == 1