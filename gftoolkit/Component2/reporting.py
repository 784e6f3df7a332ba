import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


LOGGER_NAME = "gftoolkit"

COLOR_CODES = {
    "yellow": ("\033[33m", "\033[39m"),
    "red": ("\033[31m", "\033[39m"),
    "green": ("\033[32m", "\033[39m"),
}

#status -> color used when colorize is on
STATUS_COLORS = {
    "ok": "green",
    "compatible": "green",
    "changed": "yellow",
    "info": "yellow",
    "error": "red",
}


@dataclass(frozen=True)
class ReportConfig:
    """Presentation settings for progress messages; never affects results."""
    verbose: bool = True
    colorize: bool = True


def setup_logger(name: str = LOGGER_NAME, log_file: Optional[Path] = None,
                 level: int = logging.INFO) -> logging.Logger:
    """Setup logger with console (and optional file) handler.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    return logger


class VerboseReporter:
    """
    Sink for the one-line progress messages written while a fairness object
    is built: one per resolved parameter and one per validation step.
    """

    def __init__(self, config: Optional[ReportConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or ReportConfig()
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def _paint(self, text: str, status: Optional[str]) -> str:
        color = STATUS_COLORS.get(status or "")
        if not self.config.colorize or color is None:
            return text
        start, end = COLOR_CODES[color]
        return f"{start}{text}{end}"

    def message(self, text: str, status: Optional[str] = None, level: int = logging.INFO) -> None:
        if not self.config.verbose:
            return
        self.logger.log(level, self._paint(text, status))

    def step(self, name: str, value: Any = "", note: Optional[str] = None,
             status: Optional[str] = None, level: int = logging.INFO) -> None:
        """Emit '-> name : value (note)' with the note colored by status."""
        if not self.config.verbose:
            return
        line = f"-> {name:<28}: {value}".rstrip()
        if note is not None:
            line = f"{line} ({self._paint(note, status)})"
        self.logger.log(level, line)
