"""
Logging utilities for the Customer Portal

Provides centralized logging configuration and utilities.
"""

import os
import logging
import logging.config
from typing import Optional, Dict, Any

import structlog
import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(message)s',
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console'],
    },
    'loggers': {
        'customer_portal': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    }
}


def _load_config_file(config_path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning(f"Failed to load logging config from {config_path}: {e}")
        return None


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: str = 'console'
) -> None:
    """
    Setup logging configuration

    Configures the stdlib logging tree first and then structlog on top
    of it, so both `logging.getLogger` and `structlog.get_logger`
    loggers end up on the same handlers.

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: Renderer for structlog events ('console' or 'json')
    """
    config = None
    if config_path and os.path.exists(config_path):
        config = _load_config_file(config_path)

    if not config:
        # deep enough copy for the level overrides below
        config = {
            **DEFAULT_LOGGING_CONFIG,
            'handlers': {k: dict(v) for k, v in DEFAULT_LOGGING_CONFIG['handlers'].items()},
            'loggers': {k: dict(v) for k, v in DEFAULT_LOGGING_CONFIG['loggers'].items()},
            'root': dict(DEFAULT_LOGGING_CONFIG['root']),
        }

    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level

    logging.config.dictConfig(config)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == 'json'
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    """
    Get logger instance

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog bound logger
    """
    return structlog.get_logger(name)


class RequestLogger:
    """Logger for HTTP requests"""

    def __init__(self, name: str = "customer_portal.requests"):
        self.logger = structlog.get_logger(name)

    def log_request(
        self,
        method: str,
        url: str,
        status_code: int,
        response_time: float,
        ip_address: Optional[str] = None
    ):
        """Log HTTP request"""
        self.logger.info(
            "http_request",
            request_method=method,
            request_url=url,
            response_status=status_code,
            response_time=round(response_time, 3),
            ip_address=ip_address,
        )


def get_request_logger() -> RequestLogger:
    """Get request logger instance"""
    return RequestLogger()
