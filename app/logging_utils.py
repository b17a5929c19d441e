# app/logging_utils.py
"""
Shared structured logging for the nutrition planner.

One line per entry:
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<Detail>

``run_id`` defaults to the process-wide id and can be overridden per call with
``extra={"run_id": ...}`` so that every line of one pipeline run can be grepped
together.
"""
import datetime
import logging
import uuid

RUN_ID: str = uuid.uuid4().hex[:8]


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.datetime.fromtimestamp(record.created)
        run_id = getattr(record, "run_id", RUN_ID)
        line = (
            f"{run_id}|{dt.strftime('%Y-%m-%d')}|{dt.strftime('%H:%M:%S')}|"
            f"{record.levelname}|{record.filename}:{record.lineno}|"
            f"{record.module}.{record.funcName}|{record.getMessage()}"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging(level: int = logging.INFO) -> None:
    """Attach the structured handler to the package logger once."""
    base = logging.getLogger("app")
    if base.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    base.addHandler(handler)
    base.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    init_logging()
    return logging.getLogger(name)
