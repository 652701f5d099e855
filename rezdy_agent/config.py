import os
import json
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from .env file in project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.rezdy.com/v1"
DEFAULT_STAGING_URL = "https://api-staging.rezdy.com/v1"


class Config:
    """Configuration management for the Rezdy Agent MCP server."""

    # Rezdy Agent API
    REZDY_API_KEY = os.getenv("REZDY_API_KEY")
    REZDY_ENVIRONMENT = os.getenv("REZDY_ENVIRONMENT", "production")
    REZDY_BASE_URL = os.getenv("REZDY_BASE_URL", DEFAULT_BASE_URL)
    REZDY_STAGING_URL = os.getenv("REZDY_STAGING_URL", DEFAULT_STAGING_URL)
    REZDY_HTTP_TIMEOUT = float(os.getenv("REZDY_HTTP_TIMEOUT", "30"))

    # Upstream allows 100 calls per minute
    REZDY_RATE_LIMIT_MAX = int(os.getenv("REZDY_RATE_LIMIT_MAX", "100"))
    REZDY_RATE_LIMIT_WINDOW = float(os.getenv("REZDY_RATE_LIMIT_WINDOW", "60"))

    # HTTP transport
    MCP_HTTP_HOST = os.getenv("MCP_HTTP_HOST", "0.0.0.0")
    MCP_HTTP_PORT = int(os.getenv("MCP_HTTP_PORT", "5000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls):
        """Check for missing critical keys."""
        missing = []
        if not cls.REZDY_API_KEY:
            missing.append("REZDY_API_KEY")

        if missing:
            logger.warning(
                f"Missing keys: {', '.join(missing)}. "
                "Call rezdy_agent_configure before using the other tools."
            )
            return False
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
        }
        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def setup_logging(level=None, stream=None):
    """Configure structured JSON logging.

    The stdio transport passes ``sys.stderr`` since stdout carries protocol
    messages.
    """
    import sys

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level or Config.LOG_LEVEL)
    # Remove existing handlers to avoid duplication
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
