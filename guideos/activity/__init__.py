"""Activity logging package."""

from guideos.activity.logger import ActivityLogger, configure_logging, get_activity_logger

__all__ = ["ActivityLogger", "configure_logging", "get_activity_logger"]
