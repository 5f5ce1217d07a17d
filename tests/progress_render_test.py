import io

from termstatus.ansi import Color, contains_escape
from termstatus.progress import (
    FrameState,
    ProgressRenderer,
    RenderConfig,
    effective_width,
    percentage,
    render,
    time_indicator,
    time_string,
)


def _unlimited_columns() -> int:
    return 10_000


class _SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def assert_plain_five_step_scenario() -> None:
    stream = io.StringIO()
    sleep = _SleepRecorder()
    width = render(
        stream,
        width=5,
        message="Loading",
        use_color=False,
        frame_delay_ms=0,
        fill_symbol="#",
        columns=_unlimited_columns,
        sleep=sleep,
    )

    expected = "Loading "
    for pct, remaining in zip((0, 20, 40, 60, 80), (5, 4, 3, 2, 1)):
        pct_text = "{" + f"{pct}%" + "}"
        time_text = f"[00:0{remaining}]"
        expected += f"# {pct_text} {time_text}"
        expected += "\b" * (len(pct_text) + len(time_text) + 2)
    expected += "\rLoading ######## {100%} [00:00]\n"

    if width != 5:
        raise AssertionError(f"expected effective width 5, got {width}")
    if stream.getvalue() != expected:
        raise AssertionError(f"unexpected output: {stream.getvalue()!r}")
    if sleep.calls != [0.0] * 5:
        raise AssertionError(f"expected five zero-length sleeps, got {sleep.calls}")


def assert_clamps_to_terminal_width() -> None:
    stream = io.StringIO()
    sleep = _SleepRecorder()
    width = render(
        stream,
        width=1000,
        message="Loading",
        use_color=False,
        frame_delay_ms=0,
        fill_symbol="#",
        columns=lambda: 80,
        sleep=sleep,
    )

    # 80 - len("Loading") - (len("[10:00]") + 6) - 6
    if width != 54:
        raise AssertionError(f"expected clamped width 54, got {width}")
    if len(sleep.calls) != 54:
        raise AssertionError(f"expected 54 frames, got {len(sleep.calls)}")
    last_line = stream.getvalue().rsplit("\r", 1)[-1]
    if last_line != "Loading " + "#" * 57 + " {100%} [00:00]\n":
        raise AssertionError(f"unexpected completion frame: {last_line!r}")


def assert_effective_width_bounds() -> None:
    for columns in (0, 5, 30, 80, 200):
        for requested in (0, 1, 10, 50, 150, 5000):
            for message in ("", "Loading", "A much longer loading message"):
                width = effective_width(requested, columns, message)
                bound = columns - len(message) - len(time_indicator(requested)) - 12
                if width < 0:
                    raise AssertionError(f"negative width for {columns=} {requested=}")
                if width > max(bound, 0):
                    raise AssertionError(
                        f"width {width} exceeds bound {bound} for {columns=} {requested=}"
                    )
                if requested <= bound and width != requested:
                    raise AssertionError(
                        f"spurious clamp: {requested} -> {width} for {columns=}"
                    )


def assert_degenerate_widths_do_not_raise() -> None:
    for requested, columns in ((10, 0), (-3, 200), (0, 200)):
        stream = io.StringIO()
        sleep = _SleepRecorder()
        width = render(
            stream,
            width=requested,
            use_color=False,
            frame_delay_ms=0,
            fill_symbol="#",
            columns=lambda columns=columns: columns,
            sleep=sleep,
        )
        if width != 0 or sleep.calls:
            raise AssertionError(f"expected no frames for {requested=} {columns=}")
        if stream.getvalue() != "Loading \rLoading ### {100%} [00:00]\n":
            raise AssertionError(f"unexpected output: {stream.getvalue()!r}")


def assert_percentages_and_countdown() -> None:
    renderer = ProgressRenderer(
        io.StringIO(),
        RenderConfig(width=8, use_color=False, frame_delay_ms=0),
        columns=_unlimited_columns,
    )
    frames = list(renderer.frames())

    percentages = [state.percentage for state in frames]
    if percentages != [0, 12, 25, 37, 50, 62, 75, 87]:
        raise AssertionError(f"unexpected percentages: {percentages}")
    countdown = [state.time_remaining for state in frames]
    if countdown != [8, 7, 6, 5, 4, 3, 2, 1]:
        raise AssertionError(f"unexpected countdown: {countdown}")

    # Float division then truncation: 29 / 100 * 100 is just under 29.
    truncated = [percentage(29, 100), percentage(57, 100)]
    if truncated != [28, 56]:
        raise AssertionError(f"expected truncated percentages [28, 56], got {truncated}")


def assert_color_wrapping() -> None:
    stream = io.StringIO()
    _ = render(
        stream,
        width=3,
        message="Sync",
        use_color=True,
        frame_delay_ms=0,
        fill_symbol="=",
        columns=_unlimited_columns,
        sleep=_SleepRecorder(),
    )
    output = stream.getvalue()

    if not output.startswith(f"Sync {Color.RED}"):
        raise AssertionError(f"bar color not started: {output!r}")
    for pct, remaining in ((0, 3), (33, 2), (66, 1)):
        pct_text = f"{Color.BLU}" + "{" + f"{pct}%" + "}" + f"{Color.RST}"
        time_text = f"{Color.MAG}[00:0{remaining}]{Color.RST}"
        if f"= {pct_text} {time_text}{Color.RED}" not in output:
            raise AssertionError(f"frame {pct}% not wrapped: {output!r}")
    completion = f"\r{Color.RST}Sync {Color.GRN}======" + " {100%} [00:00]"
    if not output.endswith(completion + f"{Color.RST}\n"):
        raise AssertionError(f"unexpected completion frame: {output!r}")


def assert_no_escapes_without_color() -> None:
    stream = io.StringIO()
    _ = render(
        stream,
        width=20,
        use_color=False,
        frame_delay_ms=0,
        columns=_unlimited_columns,
        sleep=_SleepRecorder(),
    )
    if contains_escape(stream.getvalue()):
        raise AssertionError("escape sequence written with color disabled")
    if stream.getvalue().count("━") != 20 + 23:
        raise AssertionError("default fill symbol not used")


def assert_erase_matches_frame_info() -> None:
    renderer = ProgressRenderer(
        io.StringIO(), RenderConfig(use_color=True), columns=_unlimited_columns
    )
    state = FrameState(step=7, percentage=14, time_remaining=43)
    if renderer.erase_text(state) != "\b" * len(" {14%} [00:43]"):
        raise AssertionError("erase length must match the visible indicator text")


def assert_time_string_quirks() -> None:
    cases = {
        0: "00:00",
        5: "00:05",
        59: "00:59",
        60: "01:00",
        125: "01:25",
        160: "02:00",
        1000: "10:00",
    }
    for value, expected in cases.items():
        if time_string(value) != expected:
            raise AssertionError(
                f"time_string({value}) = {time_string(value)!r}, expected {expected!r}"
            )
    if percentage(1, 0) != 0:
        raise AssertionError("percentage of an empty bar must be 0")


def main() -> None:
    assert_plain_five_step_scenario()
    assert_clamps_to_terminal_width()
    assert_effective_width_bounds()
    assert_degenerate_widths_do_not_raise()
    assert_percentages_and_countdown()
    assert_color_wrapping()
    assert_no_escapes_without_color()
    assert_erase_matches_frame_info()
    assert_time_string_quirks()
    print("progress render test passed")


if __name__ == "__main__":
    main()
