import logging
import sys


def _render(message: str, fields: dict[str, object]) -> str:
    if not fields:
        return message
    context = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{message} | {context}"


class Log:
    """Centralized logging for the analysis pipeline.

    Keyword arguments are appended to the line as ``key=value`` pairs, e.g.
    ``Log.info("Pages uploaded", contract_id="C7X9K2M1", pages=3)``.
    """

    _logger: logging.Logger = logging.getLogger("contract_analysis")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(_render(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(_render(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(_render(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(_render(message, fields))
