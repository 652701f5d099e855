from typing import Any, Dict

from ..models import (
    CreateCustomerParams,
    CustomerIdArgs,
    SearchCustomersParams,
    UpdateCustomerArgs,
    UpdateCustomerParams,
)
from ..session import AgentSession


async def search_customers(session: AgentSession, args: SearchCustomersParams) -> Dict[str, Any]:
    """Search agent customer database."""
    return await session.require_client().search_customers(args)


async def create_customer(session: AgentSession, args: CreateCustomerParams) -> Dict[str, Any]:
    """Create a new customer profile."""
    return await session.require_client().create_customer(args)


async def get_customer(session: AgentSession, args: CustomerIdArgs) -> Dict[str, Any]:
    return await session.require_client().get_customer(args.customer_id)


async def update_customer(session: AgentSession, args: UpdateCustomerArgs) -> Dict[str, Any]:
    client = session.require_client()
    params = UpdateCustomerParams.model_validate(args.model_dump(exclude={"customer_id"}))
    return await client.update_customer(args.customer_id, params)


async def delete_customer(session: AgentSession, args: CustomerIdArgs) -> Dict[str, Any]:
    return await session.require_client().delete_customer(args.customer_id)
