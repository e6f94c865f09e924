import logging
from typing import Optional

def get_logger(module_name: str) -> logging.Logger:
    """
    Get a standardized logger for the specified module.
    
    Args:
        module_name: The name of the module requesting the logger
        
    Returns:
        Configured logger instance
    """
    return logging.getLogger(module_name)

def log_exception(logger: logging.Logger, message: str, exception: Optional[Exception] = None) -> None:
    """
    Log an exception with a consistent format.
    
    Args:
        logger: The logger to use
        message: The error message
        exception: The exception object, if available
    """
    if exception:
        logger.error(f"{message}: {exception}", exc_info=exception)
    else:
        logger.error(message)

def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging for scripts and quiet the noisy client libraries."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    for noisy in ("socketio", "engineio", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
