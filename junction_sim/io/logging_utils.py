import logging
from logging.handlers import RotatingFileHandler


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"


def setup_logging(level: int = logging.INFO, log_file: str | None = None):
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=2))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


logger = logging.getLogger("junction_sim")
