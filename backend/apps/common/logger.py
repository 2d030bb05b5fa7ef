import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional
from uuid import UUID

_SCALAR_TYPES = (str, int, float, bool, Decimal, UUID)


def render(message: str, context: Mapping[str, Any]) -> str:
    """Render ``message | key=value ...`` for the given context mapping."""
    if not context:
        return message
    pairs = " ".join(f"{key}={_stringify(value)}" for key, value in context.items())
    return f"{message} | {pairs}"


def _stringify(value: Any) -> str:
    if value is None or isinstance(value, _SCALAR_TYPES):
        return str(value)
    return repr(value)


class AppLogger:
    """
    Proxy over a stdlib logger that carries bound key/value context.

    ``bind`` returns a child that shares the underlying logger, so context can
    be layered per module, per service/view and per call. The merged context
    is rendered into the message and also attached to the record as
    ``record.context`` for handlers that want structured output.
    """

    __slots__ = ("_logger", "_context")

    def __init__(
        self, logger: logging.Logger, context: Optional[Mapping[str, Any]] = None
    ):
        self._logger = logger
        self._context: Dict[str, Any] = dict(context or {})

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **extra: Any) -> "AppLogger":
        return AppLogger(self._logger, {**self._context, **extra})

    def debug(self, message: str, **context: Any) -> None:
        self.log(logging.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(logging.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log(logging.WARNING, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self.log(logging.ERROR, message, **context)

    def exception(self, message: str, **context: Any) -> None:
        """Log at error level including the active exception's traceback."""
        self.log(logging.ERROR, message, exc_info=True, **context)

    def log(
        self, level: int, message: str, *, exc_info: bool = False, **context: Any
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        payload = {**self._context, **context}
        self._logger.log(
            level,
            render(message, payload),
            exc_info=exc_info,
            extra={"context": payload},
        )


def get_logger(name: str) -> AppLogger:
    return AppLogger(logging.getLogger(name))
