"""AWS Lambda handler serving the Teskerti event feed."""
import json
import logging
import os
import time
from typing import Dict, Any

from feed.teskerti_client import TeskertiFeedClient
from processor.event_processor import EventProcessor


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    # Attributes every LogRecord carries; anything else came from extra=
    RESERVED_ATTRS = frozenset(
        logging.LogRecord('', logging.INFO, '', 0, '', (), None).__dict__
    ) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including fields passed via extra."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler returning the aggregated Teskerti event feed.

    Args:
        event: API Gateway event payload (unused)
        context: Lambda context object

    Returns:
        Response dict with statusCode and the feed envelope as body
    """
    base_url = os.environ.get('FEED_BASE_URL', 'http://localhost:3000')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    enrich_images = os.environ.get('ENRICH_IMAGES', 'true').lower() == 'true'

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()

    try:
        timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

        logger.info(
            "Lambda execution started",
            extra={
                'base_url': base_url,
                'timeout_seconds': timeout_seconds,
                'enrich_images': enrich_images
            }
        )

        # The client reports failures in the envelope instead of raising
        with TeskertiFeedClient(base_url, timeout=timeout_seconds) as client:
            result = client.get_events()

        if enrich_images:
            result = EventProcessor().enrich_response(result)

        duration = time.time() - start_time

        if not result.success:
            logger.warning(
                f"Event feed unavailable: {result.error}",
                extra={'duration_seconds': round(duration, 2)}
            )
            return {
                'statusCode': 502,
                'body': json.dumps(result.to_dict())
            }

        logger.info(
            "Lambda execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events': len(result.events),
                'from_cache': result.from_cache
            }
        )

        return {
            'statusCode': 200,
            'body': json.dumps(result.to_dict())
        }

    except Exception as e:
        duration = time.time() - start_time

        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        return {
            'statusCode': 500,
            'body': json.dumps({
                'success': False,
                'events': [],
                'error': str(e),
                'error_type': type(e).__name__
            })
        }
