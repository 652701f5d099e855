import logging
from typing import Callable, Optional

from .agent_client import RezdyAgentClient
from .config import Config
from .exceptions import ClientNotConfiguredError
from .models import RezdyAgentConfig

logger = logging.getLogger(__name__)


class AgentSession:
    """Holds the Rezdy client for the lifetime of one server process."""

    def __init__(self, client_factory: Callable[[RezdyAgentConfig], RezdyAgentClient] = RezdyAgentClient):
        self._client_factory = client_factory
        self.client: Optional[RezdyAgentClient] = None

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def configure(self, api_key: str, environment: str = "production") -> RezdyAgentConfig:
        """Replace the current client with one for the given key and environment."""
        config = RezdyAgentConfig(
            api_key=api_key,
            environment=environment,
            base_url=Config.REZDY_BASE_URL,
            staging_url=Config.REZDY_STAGING_URL,
        )
        if self.client is not None:
            await self.client.aclose()
        self.client = self._client_factory(config)
        logger.info(f"Rezdy Agent client configured for {config.environment} environment")
        return config

    def require_client(self) -> RezdyAgentClient:
        if self.client is None:
            raise ClientNotConfiguredError()
        return self.client

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
