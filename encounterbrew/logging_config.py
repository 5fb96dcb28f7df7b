import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", verbose: bool = False):
    """
    Configures the root logger with a console handler.
    This function should be called once at the application's entry point;
    library modules only create loggers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Remove any existing handlers to avoid duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(console_handler)
