"""Audio output — command types, sinks and the single-consumer AudioDispatcher."""

from __future__ import annotations

import io
import logging
import queue
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO, Union

import numpy as np

_logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Beep:
    freq: int          # Hz
    duration_ms: int


@dataclass(frozen=True)
class PlayBytes:
    """Encoded audio (wav/flac/ogg/mp3) held in memory."""

    data: bytes


@dataclass(frozen=True)
class PlayFile:
    """An already opened audio file; the worker closes it after decoding."""

    handle: BinaryIO


@dataclass(frozen=True)
class SetVolume:
    level: float       # 1.0 = 100%


AudioCommand = Union[Beep, PlayBytes, PlayFile, SetVolume]


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


class NullSink:
    """No-op output device; records calls for test assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def beep(self, freq: int, duration_ms: int) -> None:
        self.calls.append(("beep", freq, duration_ms))

    def play(self, source: BinaryIO) -> None:
        self.calls.append(("play", source.read()))

    def set_volume(self, level: float) -> None:
        self.calls.append(("volume", level))

    def close(self) -> None:
        self.calls.append(("close",))


class LoggingSink:
    """Output device for ``--no-audio`` runs: logs each command and keeps nothing."""

    def beep(self, freq: int, duration_ms: int) -> None:
        _logger.debug("beep %d Hz for %d ms", freq, duration_ms)

    def play(self, source: BinaryIO) -> None:
        _logger.debug("play %d bytes", len(source.read()))

    def set_volume(self, level: float) -> None:
        _logger.debug("volume %.2f", level)

    def close(self) -> None:
        pass


class SoundDeviceSink:
    """Default output device played through a ``sounddevice`` output stream.

    Sources are appended to an internal playback queue and rendered one after
    another by the stream callback; appending never interrupts what is
    already playing.  Volume is applied at render time, so a volume change
    affects everything still queued.

    Raises whatever ``sounddevice`` raises when no output device is
    available (``OSError`` when PortAudio itself is missing).

    Parameters
    ----------
    samplerate:
        Output stream rate in Hz; decoded sources are resampled to it.
    device:
        ``sounddevice`` device id or name; the system default when None.
    """

    def __init__(self, samplerate: int = 44100, device: int | str | None = None) -> None:
        import sounddevice as sd  # lazy import: needs PortAudio at runtime

        self._rate = samplerate
        self._lock = threading.Lock()
        self._pending: deque[np.ndarray] = deque()
        self._offset = 0
        self._volume = 1.0
        self._stream = sd.OutputStream(
            samplerate=samplerate,
            channels=1,
            dtype="float32",
            device=device,
            callback=self._render,
        )
        self._stream.start()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def beep(self, freq: int, duration_ms: int) -> None:
        """Queue a sine tone of *freq* Hz."""
        t = np.arange(int(self._rate * duration_ms / 1000)) / self._rate
        self._append((0.5 * np.sin(2.0 * np.pi * freq * t)).astype(np.float32))

    def play(self, source: BinaryIO) -> None:
        """Decode *source* and queue it; undecodable data is dropped."""
        import soundfile as sf

        try:
            data, rate = sf.read(source, dtype="float32", always_2d=True)
        except RuntimeError as exc:
            _logger.debug("Dropping undecodable audio: %s", exc)
            return
        self._append(self._resample(data.mean(axis=1), rate))

    def set_volume(self, level: float) -> None:
        with self._lock:
            self._volume = max(0.0, float(level))

    def close(self) -> None:
        self._stream.stop()
        self._stream.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _append(self, samples: np.ndarray) -> None:
        if samples.size == 0:
            return
        with self._lock:
            self._pending.append(samples)

    def _resample(self, samples: np.ndarray, rate: int) -> np.ndarray:
        if rate == self._rate or samples.size == 0:
            return samples.astype(np.float32)
        count = int(round(samples.size * self._rate / rate))
        positions = np.linspace(0, samples.size - 1, num=count)
        return np.interp(positions, np.arange(samples.size), samples).astype(np.float32)

    def _render(self, outdata, frames, time_info, status) -> None:
        out = outdata[:, 0]
        out.fill(0.0)
        written = 0
        with self._lock:
            while written < frames and self._pending:
                head = self._pending[0]
                take = min(frames - written, head.size - self._offset)
                out[written:written + take] = head[self._offset:self._offset + take]
                written += take
                self._offset += take
                if self._offset >= head.size:
                    self._pending.popleft()
                    self._offset = 0
            out *= self._volume


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def execute(command: AudioCommand, sink) -> None:
    """Apply one command to *sink*."""
    if isinstance(command, Beep):
        sink.beep(command.freq, command.duration_ms)
    elif isinstance(command, PlayBytes):
        sink.play(io.BytesIO(command.data))
    elif isinstance(command, PlayFile):
        with command.handle:
            sink.play(command.handle)
    elif isinstance(command, SetVolume):
        sink.set_volume(command.level)
    else:
        raise TypeError(f"Unknown audio command: {command!r}")


class AudioDispatcher:
    """Owns the output device on a dedicated worker thread.

    Commands travel over an unbounded queue and are applied strictly in
    submission order.  :meth:`submit` never blocks and never raises; once the
    worker is gone (no device at startup, or :meth:`shutdown`) submissions are
    discarded.

    Parameters
    ----------
    sink_factory:
        Called once on the worker thread to open the output device.  Anything
        it raises disables audio for the dispatcher's lifetime.
    """

    def __init__(self, sink_factory: Callable[[], object] = SoundDeviceSink) -> None:
        self._sink_factory = sink_factory
        self._queue: queue.SimpleQueue[AudioCommand | None] = queue.SimpleQueue()
        self._thread = threading.Thread(target=self._run, daemon=True, name="AudioDispatcher")
        self._thread.start()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_alive(self) -> bool:
        """True while the worker thread is running."""
        return self._thread.is_alive()

    def submit(self, command: AudioCommand) -> None:
        """Hand *command* over to the worker."""
        if not self._thread.is_alive():
            _logger.debug("Audio worker is not running; discarding %r", command)
            if isinstance(command, PlayFile):
                command.handle.close()
            return
        self._queue.put(command)

    def beep(self, freq: int, duration_ms: int) -> None:
        self.submit(Beep(freq, duration_ms))

    def play_bytes(self, data: bytes) -> None:
        self.submit(PlayBytes(data))

    def play_file(self, handle: BinaryIO) -> None:
        self.submit(PlayFile(handle))

    def set_volume(self, level: float) -> None:
        """1.0 = 100%."""
        self.submit(SetVolume(level))

    def shutdown(self, timeout: float = 2.0) -> None:
        """Stop the worker after the commands already queued."""
        self._queue.put(None)
        self._thread.join(timeout=timeout)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self) -> None:
        try:
            sink = self._sink_factory()
        except Exception:
            _logger.exception("Audio output unavailable; notifications are disabled")
            return

        try:
            while True:
                command = self._queue.get()
                if command is None:
                    break
                try:
                    execute(command, sink)
                except Exception:
                    _logger.warning("Failed to play %r", command, exc_info=True)
        finally:
            sink.close()
