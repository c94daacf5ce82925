import logging
import time
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import Settings, settings as default_settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "task-notifications"


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging for the application."""
    settings = settings or default_settings
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Create JSON formatter for structured logging
    class CustomJsonFormatter(jsonlogger.JsonFormatter):
        def add_fields(self, log_record, record, message_dict):
            super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
            log_record['service'] = settings.service_name
            log_record['environment'] = settings.environment
            log_record['timestamp'] = time.strftime(
                '%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)
            )

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if settings.log_format.lower() == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(levelname)s %(service)s %(environment)s %(name)s %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace the handler from an earlier call to avoid duplicates
    for h in list(root_logger.handlers):
        if h.get_name() == HANDLER_NAME:
            root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    # Set specific logger levels
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('google').setLevel(logging.WARNING)
