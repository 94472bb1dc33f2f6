import logging
from typing import Any, Dict, Optional, Union

import colorlog


class FieldsLogger(logging.LoggerAdapter):
    """Logger adapter that attaches key/value context fields to every record."""

    def __init__(self, logger: logging.Logger, fields: Optional[Dict[str, Any]] = None):
        super().__init__(logger, {})
        self.fields = dict(fields or {})

    def with_fields(self, **fields: Any) -> "FieldsLogger":
        """Returns a new adapter carrying these fields on top of the current ones."""
        return FieldsLogger(self.logger, {**self.fields, **fields})

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        extra["fields"] = dict(self.fields)
        kwargs["extra"] = extra
        if self.fields:
            rendered = " ".join(f"{key}={value}" for key, value in self.fields.items())
            msg = f"{msg} {rendered}"
        return msg, kwargs


def with_fields(logger: Union[logging.Logger, FieldsLogger], **fields: Any) -> FieldsLogger:
    """Adds context fields to either a plain logger or a FieldsLogger."""
    if isinstance(logger, FieldsLogger):
        return logger.with_fields(**fields)
    return FieldsLogger(logger, fields)


def setup_logger(name: str, debug: bool = False) -> FieldsLogger:
    """
    Configures the logger with a colored console format.

    Parameters
    ----------
    name : str
        Name of the logger to configure.
    debug : bool
        Log at DEBUG level instead of INFO.

    Returns
    -------
    logger : FieldsLogger
        The configured logger, ready to take context fields.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not logger.handlers:
        formatter = colorlog.ColoredFormatter(
            '%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(filename)s:%(lineno)-4d %(white)s%(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
            reset=True,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'bold_yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return FieldsLogger(logger)
