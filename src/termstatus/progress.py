"""Animated, self-overwriting terminal progress bar."""

import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TextIO

from .ansi import Color, colorize
from .terminal import terminal_columns

logger = logging.getLogger(__name__)

# Columns reserved for the "{100%}" indicator.
PERCENTAGE_MESSAGE_MAX_SIZE: int = 6

# Extra columns reserved next to the "[mm:ss]" indicator.
TIME_MESSAGE_DEFAULT_SIZE: int = 6

# The completed bar is drawn this many symbols longer than the animated one.
COMPLETION_OVERSHOOT: int = 3

DEFAULT_WIDTH: int = 50
DEFAULT_MESSAGE: str = "Loading"
DEFAULT_FRAME_DELAY_MS: int = 100
DEFAULT_FILL_SYMBOL: str = "━"

BAR_COLOR: Color = Color.RED
PERCENTAGE_COLOR: Color = Color.BLU
TIME_COLOR: Color = Color.MAG
COMPLETE_COLOR: Color = Color.GRN


def percentage(step: int, total: int) -> int:
    """Return the whole percentage of *step* out of *total*, truncated."""
    if total <= 0:
        return 0
    return int(step / total * 100)


def time_string(value: int) -> str:
    """Format a countdown value as ``mm:ss``.

    The value is split by 100, not 60: the hundreds are minutes and the low
    two digits are seconds, with any excess over 59 carried into the minutes.
    ``125`` is ``01:25`` and ``160`` is ``02:00``.
    """
    minutes = value // 100 + (value % 100) // 60
    seconds = (value % 100) % 60
    return f"{minutes:02d}:{seconds:02d}"


def percentage_indicator(value: int) -> str:
    return "{" + f"{value}%" + "}"


def time_indicator(value: int) -> str:
    return f"[{time_string(value)}]"


def max_bar_width(columns: int, message: str, time_label: str) -> int:
    """Return how many fill symbols fit on a row of *columns*."""
    available = (
        columns
        - len(message)
        - (len(time_label) + TIME_MESSAGE_DEFAULT_SIZE)
        - PERCENTAGE_MESSAGE_MAX_SIZE
    )
    return max(available, 0)


def effective_width(requested: int, columns: int, message: str) -> int:
    """Clamp *requested* to the space left on the current terminal row."""
    requested = max(requested, 0)
    limit = max_bar_width(columns, message, time_indicator(requested))
    return min(requested, limit)


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Caller-supplied settings for one progress bar."""

    width: int = DEFAULT_WIDTH
    message: str = DEFAULT_MESSAGE
    use_color: bool = True
    frame_delay_ms: int = DEFAULT_FRAME_DELAY_MS
    fill_symbol: str = DEFAULT_FILL_SYMBOL


@dataclass(frozen=True, slots=True)
class FrameState:
    """State of a single animated frame."""

    step: int
    percentage: int
    time_remaining: int

    @property
    def percentage_indicator(self) -> str:
        return percentage_indicator(self.percentage)

    @property
    def time_indicator(self) -> str:
        return time_indicator(self.time_remaining)

    @property
    def info_length(self) -> int:
        """Visible columns taken by the indicators and their two spaces."""
        return len(self.percentage_indicator) + len(self.time_indicator) + 2


class ProgressRenderer:
    """Draw one progress bar animation onto a text stream.

    Each frame appends a fill symbol followed by the percentage and countdown
    indicators, then backs the cursor over the indicators so the next frame
    overwrites them.  The symbols stay, so the bar grows by one per frame.
    Once every frame is drawn the line is rewritten as a completed bar.

    Rendering is synchronous and blocks for roughly
    ``width * frame_delay_ms`` milliseconds.  Nothing here raises for bad
    widths or an unknown terminal size; the bar just gets narrower.
    """

    _stream: TextIO
    _config: RenderConfig
    _columns: Callable[[], int]
    _sleep: Callable[[float], None]
    _width: int

    def __init__(
        self,
        stream: TextIO,
        config: RenderConfig | None = None,
        *,
        columns: Callable[[], int] = terminal_columns,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._stream = stream
        self._config = config or RenderConfig()
        self._columns = columns
        self._sleep = sleep
        self._width = effective_width(
            self._config.width, self._columns(), self._config.message
        )
        if self._width != self._config.width:
            logger.debug(
                f"Clamped progress bar width from {self._config.width} "
                f"to {self._width}"
            )

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def width(self) -> int:
        """Number of animated frames after clamping to the terminal."""
        return self._width

    # ------------------------------------------------------------------
    # Frame text
    # ------------------------------------------------------------------

    def frames(self) -> Iterator[FrameState]:
        time_remaining = self._width
        for step in range(self._width):
            yield FrameState(
                step=step,
                percentage=percentage(step, self._width),
                time_remaining=time_remaining,
            )
            time_remaining -= 1

    def header_text(self) -> str:
        text = f"{self._config.message} "
        if self._config.use_color:
            text += BAR_COLOR
        return text

    def frame_text(self, state: FrameState) -> str:
        use_color = self._config.use_color
        text = (
            f"{self._config.fill_symbol} "
            f"{colorize(state.percentage_indicator, PERCENTAGE_COLOR, enabled=use_color)}"
            f" {colorize(state.time_indicator, TIME_COLOR, enabled=use_color)}"
        )
        if use_color:
            text += BAR_COLOR
        return text

    @staticmethod
    def erase_text(state: FrameState) -> str:
        return "\b" * state.info_length

    def completion_text(self) -> str:
        cfg = self._config
        bar = cfg.fill_symbol * (self._width + COMPLETION_OVERSHOOT)
        info = f" {percentage_indicator(100)} {time_indicator(0)}"
        if cfg.use_color:
            return (
                f"\r{Color.RST}{cfg.message} {COMPLETE_COLOR}{bar}{info}{Color.RST}\n"
            )
        return f"\r{cfg.message} {bar}{info}\n"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def run(self) -> int:
        """Render the whole animation and return the number of frames drawn."""
        delay_s = max(self._config.frame_delay_ms, 0) / 1000

        _ = self._stream.write(self.header_text())
        for state in self.frames():
            _ = self._stream.write(self.frame_text(state))
            self._stream.flush()
            _ = self._stream.write(self.erase_text(state))
            self._sleep(delay_s)

        _ = self._stream.write(self.completion_text())
        self._stream.flush()
        return self._width


def render(
    stream: TextIO,
    width: int = DEFAULT_WIDTH,
    message: str = DEFAULT_MESSAGE,
    use_color: bool = True,
    frame_delay_ms: int = DEFAULT_FRAME_DELAY_MS,
    fill_symbol: str = DEFAULT_FILL_SYMBOL,
    *,
    columns: Callable[[], int] | None = None,
    sleep: Callable[[float], None] | None = None,
) -> int:
    """Render a progress bar on *stream* and return its effective width."""
    config = RenderConfig(
        width=width,
        message=message,
        use_color=use_color,
        frame_delay_ms=frame_delay_ms,
        fill_symbol=fill_symbol,
    )
    renderer = ProgressRenderer(
        stream,
        config,
        columns=columns or terminal_columns,
        sleep=sleep or time.sleep,
    )
    return renderer.run()
