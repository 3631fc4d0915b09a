import logging
import sys
from pathlib import Path


LOG_NAME = "weather_mcp"
LOG_DIR = Path("logs")
LOG_FILE = LOG_DIR / "app.log"


LOG_DIR.mkdir(parents=True, exist_ok=True)

logger = logging.getLogger(LOG_NAME)
logger.setLevel(logging.DEBUG)
logger.propagate = False

# Форматтер
log_format = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

if not logger.handlers:
    # Консоль: Только INFO и выше
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(logging.INFO)
    stream_handler.setFormatter(log_format)

    # Файл: Пишем DEBUG
    file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(log_format)

    logger.addHandler(stream_handler)
    logger.addHandler(file_handler)


def switch_console_to_stderr() -> None:
    """Переводит консольный вывод логов в stderr (stdout занят протоколом в режиме stdio)."""

    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            if getattr(handler, "stream", None) is sys.stderr:
                return
            logger.removeHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(log_format)
    logger.addHandler(stderr_handler)


if __name__ == "__main__":
    logger.info("Логгер настроен. Можно использовать logger в проекте.")
    logger.debug("Debug-сообщение (пишется только в файл).")
    logger.warning("Warning-сообщение.")
    logger.error("Error-сообщение.")
