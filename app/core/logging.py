import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # uvicorn installs its own handlers on the root logger in some setups
    logger.handlers = []
    logger.addHandler(handler)

    for noisy_logger in ["botocore", "boto3", "s3transfer", "urllib3"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    return logger
