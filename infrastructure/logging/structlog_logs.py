import logging, os, sys
import structlog

_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# stdlib logger setup
logging.basicConfig(
    format="%(message)s",
    stream=sys.stdout,
    level=_level,
)

# structlog processors
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(_level),
)

logger = structlog.get_logger("bbva")
