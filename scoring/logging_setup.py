import logging

from scoring import config


def configure_logging(level: str = None) -> None:
    """Configure root logging for command-line use. Library modules only create loggers."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
