"""
Tool functions exposed by the Rezdy Agent MCP server.

Every tool takes the shared ``AgentSession`` plus its validated argument
model. ``register_tools`` binds the session and registers each tool with
its name, description and argument model:

    server = MCPServer()
    session = AgentSession()
    register_tools(server, session)
"""

import functools

from ..models import (
    BookingIdArgs,
    CalculatePricingArgs,
    CalculateQuantityPricingArgs,
    CancelBookingArgs,
    ConfigureArgs,
    CreateBookingParams,
    CreateCustomerParams,
    CustomerIdArgs,
    NoArgs,
    ProductIdArgs,
    QuoteBookingParams,
    SearchAvailabilityParams,
    SearchCustomersParams,
    SearchProductsParams,
    UpdateBookingArgs,
    UpdateCustomerArgs,
)
from .configure import configure
from .products import (
    search_products,
    get_product,
    get_product_pickups,
    get_categories,
    get_locations,
    get_suppliers,
)
from .bookings import (
    search_availability,
    quote_booking,
    create_booking,
    get_booking,
    update_booking,
    cancel_booking,
)
from .customers import (
    search_customers,
    create_customer,
    get_customer,
    update_customer,
    delete_customer,
)
from .pricing import calculate_pricing, calculate_quantity_pricing

TOOL_PREFIX = "rezdy_agent_"

# (function, description, argument model)
TOOLS = [
    (configure, "Configure Rezdy Agent API connection with API key and environment", ConfigureArgs),
    (search_products, "Search marketplace products from all suppliers", SearchProductsParams),
    (get_product, "Get detailed information about a specific marketplace product", ProductIdArgs),
    (get_product_pickups, "Get pickup locations for a specific product", ProductIdArgs),
    (search_availability, "Search availability sessions for a product with pricing", SearchAvailabilityParams),
    (quote_booking, "Get a quote for a booking with pricing details", QuoteBookingParams),
    (create_booking, "Create a confirmed booking", CreateBookingParams),
    (get_booking, "Get details of a specific booking", BookingIdArgs),
    (update_booking, "Update an existing booking", UpdateBookingArgs),
    (cancel_booking, "Cancel an existing booking", CancelBookingArgs),
    (search_customers, "Search agent customer database", SearchCustomersParams),
    (create_customer, "Create a new customer profile", CreateCustomerParams),
    (get_customer, "Get details of a specific customer", CustomerIdArgs),
    (update_customer, "Update an existing customer profile", UpdateCustomerArgs),
    (delete_customer, "Delete a customer profile", CustomerIdArgs),
    (get_categories, "Get all marketplace product categories", NoArgs),
    (get_locations, "Get all marketplace locations", NoArgs),
    (get_suppliers, "Get all marketplace suppliers", NoArgs),
    (calculate_pricing, "Calculate agent pricing: discount, taxes, fees, commission and net price", CalculatePricingArgs),
    (calculate_quantity_pricing, "Total selected quantities against an availability price table", CalculateQuantityPricingArgs),
]


def register_tools(server, session):
    for func, description, args_model in TOOLS:
        server.register_tool(
            functools.partial(func, session),
            name=f"{TOOL_PREFIX}{func.__name__}",
            description=description,
            args_model=args_model,
        )
