"""
Logging configuration for shopclock
"""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a stdout handler.

    Args:
        level: Log level name, e.g. "DEBUG" or "INFO"
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured: level={level}")
