from .logger import configure_logging, ensure_configured, get_logger

__all__ = ["configure_logging", "ensure_configured", "get_logger"]
