"""
Async client for the Rezdy Agent API.

Read endpoints are plain pass-through calls. Mutating endpoints run the
business-rule validators first and raise ``RezdyValidationError`` without
touching the network when any of them reports a problem.
"""

import json
import logging
from typing import Any, Dict, Iterable, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel

from .config import Config
from .exceptions import RezdyAPIError, RezdyValidationError
from .models import (
    CreateBookingParams,
    CreateCustomerParams,
    PricingResult,
    QuoteBookingParams,
    RezdyAgentConfig,
    SearchAvailabilityParams,
    SearchCustomersParams,
    SearchProductsParams,
    UpdateBookingParams,
    UpdateCustomerParams,
)
from .pricing import compute_agent_pricing, sum_quantity_pricing
from .rate_limit import RateLimiter
from .validation import (
    sanitize_string,
    validate_booking_dates,
    validate_customer_data,
    validate_quantities,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _coerce(model_cls: Type[ModelT], params: Union[ModelT, Dict[str, Any], None]) -> ModelT:
    if params is None:
        return model_cls()
    if isinstance(params, model_cls):
        return params
    return model_cls.model_validate(params)


def _raise_if_invalid(label: str, errors: list) -> None:
    if errors:
        raise RezdyValidationError(label, errors)


class RezdyAgentClient:
    """
    Thin wrapper over the Rezdy marketplace and agent endpoints.

    Args:
        config: API key and environment selection.
        http_client: Optional pre-built ``httpx.AsyncClient`` (tests pass one
            backed by ``httpx.MockTransport``). Its base URL must already
            point at the Rezdy API.
        rate_limiter: Optional limiter; defaults to the configured
            requests-per-window limit.

    Example:
        >>> client = RezdyAgentClient(RezdyAgentConfig(api_key="..."))
        >>> products = await client.search_products({"name": "harbour cruise"})
        >>> await client.aclose()
    """

    def __init__(
        self,
        config: RezdyAgentConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self.config = config
        self.rate_limiter = rate_limiter or RateLimiter(
            max_requests=Config.REZDY_RATE_LIMIT_MAX,
            window_seconds=Config.REZDY_RATE_LIMIT_WINDOW,
        )
        self._http = http_client or httpx.AsyncClient(
            base_url=config.effective_base_url,
            timeout=Config.REZDY_HTTP_TIMEOUT,
        )

    @property
    def base_url(self) -> str:
        return self.config.effective_base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        await self.rate_limiter.acquire()

        headers = {
            "Content-Type": "application/json",
            "X-Rezdy-ApiKey": self.config.api_key,
        }

        logger.info(f"Rezdy request: {method} {endpoint}")
        try:
            response = await self._http.request(
                method, endpoint, params=params, json=body, headers=headers
            )
            data = response.json() if response.content else {}
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Rezdy request to {endpoint} failed: {e}")
            raise RezdyAPIError(f"Failed to make request to {endpoint}: {e}") from e

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            message = (error.get("message") if isinstance(error, dict) else error) or response.reason_phrase
            logger.warning(f"Rezdy API returned {response.status_code} for {endpoint}: {message}")
            raise RezdyAPIError(
                f"Failed to make request to {endpoint}: Rezdy API Error: {message}",
                status_code=response.status_code,
            )

        return data

    # Products

    async def search_products(self, params: Union[SearchProductsParams, Dict[str, Any], None] = None) -> Dict[str, Any]:
        # List values (tags) are sent as repeated query keys
        query = _coerce(SearchProductsParams, params).to_payload()
        return await self._request("GET", "/marketplace/products", params=query)

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/marketplace/products/{product_id}")

    async def get_product_pickups(self, product_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/marketplace/products/{product_id}/pickups")

    # Availability

    async def search_availability(self, params: Union[SearchAvailabilityParams, Dict[str, Any]]) -> Dict[str, Any]:
        params = _coerce(SearchAvailabilityParams, params)
        _raise_if_invalid("Validation errors", validate_booking_dates(params.start_date, params.end_date))

        # List values (quantities) are sent JSON-encoded
        query = {
            key: json.dumps(value) if isinstance(value, list) else value
            for key, value in params.to_payload().items()
        }
        return await self._request("GET", "/marketplace/availability", params=query)

    # Bookings

    async def quote_booking(self, params: Union[QuoteBookingParams, Dict[str, Any]]) -> Dict[str, Any]:
        params = _coerce(QuoteBookingParams, params)
        _raise_if_invalid("Quantity validation errors", validate_quantities(params.quantities))
        if params.customer:
            _raise_if_invalid("Customer validation errors", validate_customer_data(params.customer))

        return await self._request("POST", "/marketplace/bookings/quote", body=params.to_payload())

    async def create_booking(self, params: Union[CreateBookingParams, Dict[str, Any]]) -> Dict[str, Any]:
        params = _coerce(CreateBookingParams, params)
        _raise_if_invalid("Quantity validation errors", validate_quantities(params.quantities))
        _raise_if_invalid("Customer validation errors", validate_customer_data(params.customer))
        if params.start_time:
            _raise_if_invalid("Date validation errors", validate_booking_dates(params.start_time))

        return await self._request("POST", "/marketplace/bookings", body=params.to_payload())

    async def get_booking(self, booking_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/marketplace/bookings/{booking_id}")

    async def update_booking(
        self, booking_id: str, params: Union[UpdateBookingParams, Dict[str, Any]]
    ) -> Dict[str, Any]:
        params = _coerce(UpdateBookingParams, params)
        if params.customer:
            _raise_if_invalid("Customer validation errors", validate_customer_data(params.customer))

        return await self._request("PUT", f"/marketplace/bookings/{booking_id}", body=params.to_payload())

    async def cancel_booking(self, booking_id: str, reason: Optional[str] = None) -> Dict[str, Any]:
        body = {"reason": sanitize_string(reason)} if reason else None
        return await self._request("POST", f"/marketplace/bookings/{booking_id}/cancel", body=body)

    # Customers

    async def search_customers(self, params: Union[SearchCustomersParams, Dict[str, Any], None] = None) -> Dict[str, Any]:
        query = _coerce(SearchCustomersParams, params).to_payload()
        return await self._request("GET", "/agent/customers", params=query)

    async def create_customer(self, params: Union[CreateCustomerParams, Dict[str, Any]]) -> Dict[str, Any]:
        params = _coerce(CreateCustomerParams, params)
        _raise_if_invalid("Customer validation errors", validate_customer_data(params))

        return await self._request("POST", "/agent/customers", body=params.to_payload())

    async def get_customer(self, customer_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/agent/customers/{customer_id}")

    async def update_customer(
        self, customer_id: str, params: Union[UpdateCustomerParams, Dict[str, Any]]
    ) -> Dict[str, Any]:
        params = _coerce(UpdateCustomerParams, params)
        # Touching any identity field re-checks the whole identity; missing
        # ones count as empty
        if params.email or params.first_name or params.last_name:
            candidate = params.model_copy(
                update={
                    "email": params.email or "",
                    "first_name": params.first_name or "",
                    "last_name": params.last_name or "",
                }
            )
            _raise_if_invalid("Customer validation errors", validate_customer_data(candidate))

        return await self._request("PUT", f"/agent/customers/{customer_id}", body=params.to_payload())

    async def delete_customer(self, customer_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/agent/customers/{customer_id}")

    # Reference data

    async def get_categories(self) -> Dict[str, Any]:
        return await self._request("GET", "/marketplace/categories")

    async def get_locations(self) -> Dict[str, Any]:
        return await self._request("GET", "/marketplace/locations")

    async def get_suppliers(self) -> Dict[str, Any]:
        return await self._request("GET", "/marketplace/suppliers")

    # Local pricing helpers

    def calculate_pricing(
        self,
        base_price: float,
        commission_rate: float = 0,
        discount_rate: float = 0,
        fees: float = 0,
        tax_rate: float = 0,
        currency: str = "USD",
    ) -> PricingResult:
        return compute_agent_pricing(base_price, commission_rate, discount_rate, fees, tax_rate, currency)

    def calculate_quantity_pricing(
        self,
        quantities: Iterable[Any],
        pricing: Iterable[Any],
        use_agent_pricing: bool = False,
    ) -> float:
        return sum_quantity_pricing(quantities, pricing, use_agent_pricing)
