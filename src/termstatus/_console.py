"""Shared Rich Console instance for log output."""

from rich.console import Console

# Log records go to stderr so the progress bar owns stdout and the two never
# interleave on the same line.
console = Console(stderr=True)
