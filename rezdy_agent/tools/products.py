from typing import Any, Dict

from ..models import NoArgs, ProductIdArgs, SearchProductsParams
from ..session import AgentSession


async def search_products(session: AgentSession, args: SearchProductsParams) -> Dict[str, Any]:
    """Search marketplace products from all suppliers."""
    return await session.require_client().search_products(args)


async def get_product(session: AgentSession, args: ProductIdArgs) -> Dict[str, Any]:
    """Get detailed information about a specific marketplace product."""
    return await session.require_client().get_product(args.product_id)


async def get_product_pickups(session: AgentSession, args: ProductIdArgs) -> Dict[str, Any]:
    """Get pickup locations for a specific product."""
    return await session.require_client().get_product_pickups(args.product_id)


async def get_categories(session: AgentSession, args: NoArgs) -> Dict[str, Any]:
    return await session.require_client().get_categories()


async def get_locations(session: AgentSession, args: NoArgs) -> Dict[str, Any]:
    return await session.require_client().get_locations()


async def get_suppliers(session: AgentSession, args: NoArgs) -> Dict[str, Any]:
    return await session.require_client().get_suppliers()
