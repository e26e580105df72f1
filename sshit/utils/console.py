"""Colorful console logging for sshit.

Log lines read ``HH:MM:SS.mmm | LEVEL | component | message``. With colors
on, socket paths, durations, socket statuses and failure kinds stand out.
"""

import logging
import re
import sys
from datetime import datetime

RESET = "\033[0m"
DIM = "\033[2m"
GREY = "\033[90m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
MAGENTA = "\033[95m"
CYAN = "\033[96m"
WHITE = "\033[37m"
ALERT = "\033[1;37;41m"

LEVEL_STYLES = {
    "DEBUG": GREY,
    "INFO": GREEN,
    "WARNING": YELLOW,
    "ERROR": RED,
    "CRITICAL": ALERT,
}

# Checked in order, so longer prefixes first
COMPONENT_STYLES = (
    ("sshit.services.sockets", MAGENTA),
    ("sshit.services.shell", BLUE),
    ("sshit.middleware", YELLOW),
    ("sshit.tools", CYAN),
    ("sshit.server", CYAN),
)

NOISY_LOGGERS = (
    "fastmcp",
    "mcp",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "starlette",
    "anyio",
)

HIGHLIGHTS = (
    (re.compile(r"(/\S*sshit-ctrl-\S*)"), CYAN),
    (re.compile(r"(\d+\.?\d*ms)"), YELLOW),
    (re.compile(r"\b(alive)\b"), GREEN),
    (re.compile(r"\b(dead|not-found)\b"), RED),
    (re.compile(r"(failed: \w+)"), RED),
)


class ColorfulFormatter(logging.Formatter):
    """Pipe-separated log formatter with optional ANSI colors."""

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _paint(self, text: str, style: str) -> str:
        return f"{style}{text}{RESET}" if self.use_colors else text

    def _component(self, name: str) -> str:
        style = next((s for prefix, s in COMPONENT_STYLES if name.startswith(prefix)), WHITE)
        return self._paint(f"{name.removeprefix('sshit.'):<18}", style)

    def _message(self, message: str) -> str:
        if not self.use_colors:
            return message
        for pattern, style in HIGHLIGHTS:
            message = pattern.sub(f"{style}\\1{RESET}", message)
        return message

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        sep = self._paint("|", DIM)
        fields = [
            self._paint(f"{stamp}.{int(record.msecs):03d}", DIM),
            self._paint(f"{record.levelname:<8}", LEVEL_STYLES.get(record.levelname, WHITE)),
            self._component(record.name),
            self._message(record.getMessage()),
        ]
        line = f" {sep} ".join(fields)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str = "INFO", use_colors: bool = True) -> None:
    """Attach a stderr handler to the ``sshit`` logger.

    Colors are dropped when stderr is not a TTY. Safe to call repeatedly;
    later calls only adjust the level.

    Args:
        level: Level name for the sshit logger
        use_colors: Whether to emit ANSI colors
    """
    root = logging.getLogger("sshit")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors and sys.stderr.isatty()))
        root.addHandler(handler)
        root.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
