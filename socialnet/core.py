from prometheus_client import Counter, start_http_server
import logging
from .config import ConfigError, metrics_port

logger = logging.getLogger(__name__)

MESSAGE_SENDS = Counter(
    'socialnet_message_send_total',
    'Message send attempts by outcome',
    ['outcome'],
)
REGISTRATIONS = Counter(
    'socialnet_registrations_total',
    'User registration attempts by result',
    ['result'],
)


def init_metrics(port: int = None):
    """Initialize Prometheus metrics server"""
    try:
        port = port or metrics_port()
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except (ConfigError, OSError) as e:
        logger.warning(f'Prometheus start failed: {e}')
