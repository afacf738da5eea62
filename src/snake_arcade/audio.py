"""Sound cues for game events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass

import numpy as np

from snake_arcade.events import GameEvent

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 44_100
_SILENCE_GAIN = 1e-4


@dataclass(frozen=True)
class Tone:
    """A short oscillator blip with an exponential fade-out."""

    frequency: float
    duration: float = 0.08
    waveform: str = "square"
    gain: float = 0.04

    def to_dict(self) -> dict:
        return asdict(self)


TONES: dict[GameEvent, Tone] = {
    GameEvent.EAT: Tone(660.0, 0.06, "triangle", 0.05),
    GameEvent.GAME_OVER: Tone(180.0, 0.23, "sawtooth", 0.05),
}


def synthesize(tone: Tone, sample_rate: int = DEFAULT_SAMPLE_RATE) -> np.ndarray:
    """Render *tone* to a float32 mono sample array in ``[-gain, gain]``."""
    n = max(1, int(round(tone.duration * sample_rate)))
    t = np.arange(n, dtype=np.float64) / sample_rate
    phase = (t * tone.frequency) % 1.0

    if tone.waveform == "sine":
        wave = np.sin(2.0 * np.pi * phase)
    elif tone.waveform == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif tone.waveform == "sawtooth":
        wave = 2.0 * phase - 1.0
    elif tone.waveform == "triangle":
        wave = 1.0 - 4.0 * np.abs(phase - 0.5)
    else:
        raise ValueError(f"Unknown waveform {tone.waveform!r}.")

    # Exponential ramp from the tone gain down to near-silence.
    envelope = tone.gain * (_SILENCE_GAIN / tone.gain) ** (t / tone.duration)
    return (wave * envelope).astype(np.float32)


class AudioCues:
    """Event listener that renders the matching tone and hands it to a sink.

    The sink is called with the :class:`Tone` and its rendered samples.
    Events without a tone (such as a win) are ignored, as is everything
    while ``enabled`` is false.
    """

    def __init__(
        self,
        sink: Callable[[Tone, np.ndarray], None],
        enabled: bool = True,
        tones: dict[GameEvent, Tone] | None = None,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
    ) -> None:
        self.sink = sink
        self.enabled = enabled
        self.tones = tones if tones is not None else TONES
        self.sample_rate = sample_rate

    def __call__(self, event: GameEvent) -> None:
        if not self.enabled:
            return
        tone = self.tones.get(event)
        if tone is None:
            return
        logger.debug("Playing %s tone.", event.value)
        self.sink(tone, synthesize(tone, self.sample_rate))
