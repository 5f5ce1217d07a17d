import logging
import os
import sys
from argparse import ArgumentParser, BooleanOptionalAction, Namespace
from typing import NoReturn, TypeVar

from rich.logging import RichHandler

from . import __version__
from ._console import console
from .exceptions import ConfigurationError
from .log import PrefixFormatter
from .progress import (
    DEFAULT_FILL_SYMBOL,
    DEFAULT_FRAME_DELAY_MS,
    DEFAULT_MESSAGE,
    DEFAULT_WIDTH,
    ProgressRenderer,
    RenderConfig,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOG_STYLES: tuple[str, ...] = ("rich", "prefix")


class MyArgParser(ArgumentParser):
    """Argument parser that prints help on error instead of just usage."""

    def error(self, message: str) -> NoReturn:
        """Print the error message followed by full help, then exit."""
        _ = sys.stderr.write(f"{self.prog}: {message}\n\n")
        self.print_help()
        sys.exit(2)


def _parse_bool_env(value: str | None, *, env_var: str) -> bool | None:
    """Parse an environment variable string into a boolean, or ``None`` if unset."""
    if value is None:
        return None

    normalized = value.strip().lower()
    true_values = {"1", "true", "yes", "y", "on"}
    false_values = {"0", "false", "no", "n", "off"}

    if normalized in true_values:
        return True
    if normalized in false_values:
        return False

    raise ConfigurationError(
        f"Invalid boolean value for {env_var}: {value!r}. "
        "Use one of 1/0, true/false, yes/no, on/off."
    )


def _parse_int_env(value: str | None, *, env_var: str) -> int | None:
    """Parse an environment variable string into an int, or ``None`` if unset."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(
            f"Invalid integer value for {env_var}: {value!r}"
        ) from None


def _with_env(arg_value: T | None, env_var: str) -> T | str | None:
    """Return *arg_value* if set, otherwise fall back to the named environment variable."""
    if arg_value is not None:
        return arg_value
    return os.environ.get(env_var)


def _argparser() -> MyArgParser:
    """Build and return the CLI argument parser with all flags and env-var support."""
    parser = MyArgParser(description="Render a colorized terminal progress bar")

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-w",
        "--width",
        dest="width",
        metavar="N",
        help=f"Number of bar steps (default: {DEFAULT_WIDTH}, env: TERMSTATUS_WIDTH)",
        type=int,
        default=None,
    )
    parser.add_argument(
        "-m",
        "--message",
        dest="message",
        metavar="TEXT",
        help=f"Label left of the bar (default: {DEFAULT_MESSAGE}, env: TERMSTATUS_MESSAGE)",
        default=None,
    )
    parser.add_argument(
        "--color",
        dest="color",
        help="Colorize the bar (env: TERMSTATUS_COLOR)",
        action=BooleanOptionalAction,
        default=None,
    )
    parser.add_argument(
        "--delay",
        dest="delay_ms",
        metavar="MS",
        help=f"Pause between frames in milliseconds (default: {DEFAULT_FRAME_DELAY_MS}, env: TERMSTATUS_DELAY_MS)",
        type=int,
        default=None,
    )
    parser.add_argument(
        "-s",
        "--symbol",
        dest="symbol",
        metavar="S",
        help="Fill symbol (env: TERMSTATUS_SYMBOL)",
        default=None,
    )
    parser.add_argument(
        "--log-style",
        dest="log_style",
        choices=LOG_STYLES,
        help="Log record layout on stderr (default: rich, env: TERMSTATUS_LOG_STYLE)",
        default=None,
    )
    parser.add_argument(
        "-d",
        "--debug",
        dest="debug",
        help="Debug output (env: TERMSTATUS_DEBUG)",
        action="store_true",
        default=None,
    )

    return parser


def _resolve_config(args: Namespace) -> RenderConfig:
    """Merge CLI arguments, ``TERMSTATUS_*`` variables and defaults."""
    width = (
        args.width
        if args.width is not None
        else _parse_int_env(
            os.environ.get("TERMSTATUS_WIDTH"), env_var="TERMSTATUS_WIDTH"
        )
    )
    delay_ms = (
        args.delay_ms
        if args.delay_ms is not None
        else _parse_int_env(
            os.environ.get("TERMSTATUS_DELAY_MS"), env_var="TERMSTATUS_DELAY_MS"
        )
    )
    use_color = (
        args.color
        if args.color is not None
        else _parse_bool_env(
            os.environ.get("TERMSTATUS_COLOR"), env_var="TERMSTATUS_COLOR"
        )
    )
    message = _with_env(args.message, "TERMSTATUS_MESSAGE")
    symbol = _with_env(args.symbol, "TERMSTATUS_SYMBOL")

    if symbol is not None and not symbol:
        raise ConfigurationError("Fill symbol must not be empty")

    return RenderConfig(
        width=width if width is not None else DEFAULT_WIDTH,
        message=message if message is not None else DEFAULT_MESSAGE,
        use_color=use_color if use_color is not None else True,
        frame_delay_ms=delay_ms if delay_ms is not None else DEFAULT_FRAME_DELAY_MS,
        fill_symbol=symbol if symbol is not None else DEFAULT_FILL_SYMBOL,
    )


def _resolve_logging(args: Namespace) -> tuple[str, bool]:
    log_style = _with_env(args.log_style, "TERMSTATUS_LOG_STYLE") or "rich"
    if log_style not in LOG_STYLES:
        raise ConfigurationError(
            f"Invalid value for TERMSTATUS_LOG_STYLE: {log_style!r}. "
            f"Use one of {', '.join(LOG_STYLES)}."
        )
    debug = (
        args.debug
        if args.debug is not None
        else _parse_bool_env(
            os.environ.get("TERMSTATUS_DEBUG"), env_var="TERMSTATUS_DEBUG"
        )
    )
    return log_style, bool(debug)


def _configure_logging(log_style: str, debug: bool) -> None:
    # logging
    #   default : INFO via RichHandler on the shared stderr console
    #   prefix  : "{HH:MM:SS} [LEVEL]    {file}   " lines on stderr
    #   -d      : DEBUG for everything, raw format unless prefix was chosen
    level = logging.DEBUG if debug else logging.INFO
    if log_style == "prefix":
        handler = logging.StreamHandler(sys.stderr)
        # Only stdout is colorized.
        handler.setFormatter(PrefixFormatter(color=False))
        logging.basicConfig(level=level, handlers=[handler], force=True)
    elif debug:
        logging.basicConfig(
            format="%(levelname)s: %(name)s: %(message)s",
            level=logging.DEBUG,
            force=True,
        )
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False, markup=False)],
            force=True,
        )


def main(argv: list[str] | None = None) -> None:
    """Entry point: parse arguments, resolve env vars, and render one bar."""
    args: Namespace = _argparser().parse_args(argv)

    try:
        config = _resolve_config(args)
        log_style, debug = _resolve_logging(args)
    except ConfigurationError as exc:
        _ = sys.stderr.write(f"ERROR: {exc}\n\n")
        _argparser().print_help()
        sys.exit(2)

    _configure_logging(log_style, debug)

    renderer = ProgressRenderer(sys.stdout, config)
    logger.info(
        f"Rendering {renderer.width} frames at {config.frame_delay_ms} ms per frame"
    )
    _ = renderer.run()
    logger.debug("Progress bar complete")


if __name__ == "__main__":
    main()
