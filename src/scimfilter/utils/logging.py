import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from scimfilter.config import settings


console = Console()


def setup_logging(
    level: Optional[str] = None,
    format: str = "%(message)s",
    datefmt: str = "[%X]",
) -> None:
    log_level = level or settings.log_level

    logging.basicConfig(
        level=log_level,
        format=format,
        datefmt=datefmt,
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=True,
                tracebacks_show_locals=settings.debug,
                show_path=settings.debug,
                enable_link_path=settings.debug,
            )
        ],
    )

    # Set specific log levels for libraries
    logging.getLogger("tortoise").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if settings.is_production:
        logging.getLogger("tortoise.db_client").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# Export a default logger
logger = get_logger("scimfilter")
