import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Server loggers that share our handler so request and pipeline lines interleave.
_SERVER_LOGGERS = ("uvicorn.error", "uvicorn.access")


class Log:
    """Process-wide logging facade for the analyzer and its HTTP server."""

    _logger: logging.Logger = logging.getLogger("contract_analyzer")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler.

        Safe to call more than once: handlers are only added the first time.
        """
        level = log_level.upper()
        cls._logger.setLevel(level)
        if cls._logger.handlers:
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        cls._logger.addHandler(handler)
        for name in _SERVER_LOGGERS:
            server_logger = logging.getLogger(name)
            server_logger.setLevel(level)
            server_logger.handlers = [handler]
            server_logger.propagate = False

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at error level with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)
