from ..models import ConfigureArgs
from ..session import AgentSession


async def configure(session: AgentSession, args: ConfigureArgs) -> str:
    """Configure Rezdy Agent API connection with API key and environment."""
    config = await session.configure(args.api_key, args.environment)
    return f"Rezdy Agent API configured successfully for {config.environment} environment"
