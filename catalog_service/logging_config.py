import datetime
import json
import logging

LOGGER_NAME = 'catalog_service'

EXTRA_FIELDS = ('endpoint', 'product_id', 'review_id', 'status_code', 'error', 'count')


# Structured logging
class JSONFormatter(logging.Formatter):
    def __init__(self, service=LOGGER_NAME):
        super().__init__()
        self.service = service

    def format(self, record):
        log_entry = {
            'timestamp': datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None).isoformat() + 'Z',
            'level': record.levelname,
            'service': self.service,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add extra fields if present
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


def setup_logging(service=LOGGER_NAME, level='INFO'):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service))
    logger.addHandler(handler)
    return logger
