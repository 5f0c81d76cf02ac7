"""
Structured logging for the Selection Analysis Microservice.
"""
import logging
import sys

from app.core.config import settings


def setup_logger(name: str = "selection", level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Create a configured logger instance.

    Args:
        name: Logger name for identification
        level: Log level name (DEBUG, INFO, ...)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Console handler with formatting
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


# Global logger instance
logger = setup_logger()


def log_request(endpoint: str, method: str = "POST") -> None:
    """Log incoming API request."""
    logger.info(f"Request: {method} {endpoint}")


def log_response(endpoint: str, status: str, duration_ms: float = None) -> None:
    """Log API response with optional duration."""
    msg = f"Response: {endpoint} -> {status}"
    if duration_ms:
        msg += f" ({duration_ms:.0f}ms)"
    logger.info(msg)


def format_fields(**fields) -> str:
    """Render keyword fields as sorted key=value pairs."""
    return " ".join(f"{key}={value}" for key, value in sorted(fields.items()))


def log_error(context: str, error: Exception, log: logging.Logger = None, **fields) -> None:
    """Log error with context, plus optional key=value fields."""
    msg = f"Error in {context}: {type(error).__name__}: {str(error)}"
    if fields:
        msg += f" | {format_fields(**fields)}"
    (log or logger).error(msg)


def log_analysis(
    component: str,
    event: str,
    level: int = logging.DEBUG,
    log: logging.Logger = None,
    **fields
) -> None:
    """
    Log an analysis-engine event with structured key=value context.

    Example:
        log_analysis("SelectionAnalyzer", "cache hit", cache_key="ab12...")
        -> "SelectionAnalyzer: cache hit | cache_key=ab12..."
    """
    msg = f"{component}: {event}"
    if fields:
        msg += f" | {format_fields(**fields)}"
    (log or logger).log(level, msg)
