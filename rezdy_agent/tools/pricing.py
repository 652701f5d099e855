"""Local pricing tools. These never call the upstream API."""

from typing import Any, Dict

from ..models import CalculatePricingArgs, CalculateQuantityPricingArgs
from ..pricing import compute_agent_pricing, format_price, sum_quantity_pricing
from ..session import AgentSession


def calculate_pricing(session: AgentSession, args: CalculatePricingArgs) -> Dict[str, Any]:
    """Break a price down into agent discount, taxes, fees, commission and net price."""
    pricing = compute_agent_pricing(
        args.base_price,
        commission_rate=args.commission_rate,
        discount_rate=args.discount_rate,
        fees=args.fees,
        tax_rate=args.tax_rate,
        currency=args.currency,
    )
    result = pricing.model_dump(by_alias=True)
    result["formatted"] = {
        "total": format_price(pricing.total, pricing.currency),
        "netPrice": format_price(pricing.net_price, pricing.currency),
    }
    return result


def calculate_quantity_pricing(session: AgentSession, args: CalculateQuantityPricingArgs) -> Dict[str, Any]:
    """Total the selected quantities against a session price table."""
    total = sum_quantity_pricing(args.quantities, args.pricing, args.use_agent_pricing)
    return {
        "total": total,
        "currency": args.currency,
        "formatted": format_price(total, args.currency),
    }
