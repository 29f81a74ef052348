import logging
import re
from typing import Iterable, Union


_LONG_HEX = re.compile(r"\b([0-9a-fA-F]{16})[0-9a-fA-F]{8,}\b")


class DataRedactingFilter(logging.Filter):
    """Shorten digest-sized hex strings and long data payloads in log records."""

    def __init__(self, max_data_chars: int = 64):
        super().__init__()
        self.max_data_chars = max_data_chars

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.getMessage())
        msg = _LONG_HEX.sub(r"\1...", msg)
        msg = re.sub(
            r"(data=)(\S{%d})\S+" % self.max_data_chars, r"\1\2...", msg
        )
        record.msg = msg
        record.args = ()
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("merkle_core", "merkle_cli"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)
    f = DataRedactingFilter()
    # logger filters never see records propagated from child loggers
    for h in logging.getLogger().handlers:
        if not any(isinstance(x, DataRedactingFilter) for x in h.filters):
            h.addFilter(f)
    for name in loggers:
        logging.getLogger(name).setLevel(level)
