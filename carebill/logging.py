import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from carebill.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s [%(run_id)s]: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(run_id)s %(message)s"

NO_RUN = "-"

_run_id: ContextVar[str] = ContextVar("invoice_run_id", default=NO_RUN)


class RunContextFilter(logging.Filter):
    """Stamp every record with the id of the invoice run in progress."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _run_id.get()
        return True


@contextmanager
def invoice_run(run_id: str) -> Iterator[str]:
    token = _run_id.set(run_id)
    try:
        yield run_id
    finally:
        _run_id.reset(token)


def current_run_id() -> str:
    return _run_id.get()


def configure_logging() -> None:
    """Configure the root logger based on settings.

    Call once at startup, before building services. Records logged inside
    ``invoice_run()`` carry its id in ``run_id``.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(RunContextFilter())

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt=JSON_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # fpdf2 reports font handling at INFO.
    logging.getLogger("fpdf").setLevel(logging.WARNING)
