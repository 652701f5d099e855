"""
Pydantic models for the Rezdy Agent API.

Field names are snake_case in Python and camelCase on the wire, matching the
upstream request and response shapes. Tool argument models double as the
input schemas advertised through ``tools/list``.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import DEFAULT_BASE_URL, DEFAULT_STAGING_URL


def read_field(obj: Any, name: str) -> Any:
    """Read a snake_case field from a model, or from a camelCase/snake_case mapping."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        camel = to_camel(name)
        if camel in obj:
            return obj[camel]
        return obj.get(name)
    return getattr(obj, name, None)


class RezdyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Dump to the camelCase dict sent upstream, dropping unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)


# Configuration

class RezdyAgentConfig(RezdyModel):
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    staging_url: str = DEFAULT_STAGING_URL
    environment: Literal["production", "staging"] = "production"

    @property
    def effective_base_url(self) -> str:
        return self.staging_url if self.environment == "staging" else self.base_url


# Value structures

class QuantityLine(RezdyModel):
    option_id: int = Field(..., description="Price option ID")
    value: int = Field(..., description="Number of units")


class PriceTableEntry(RezdyModel):
    option_id: int
    price: float
    agent_price: Optional[float] = None


class PricingResult(RezdyModel):
    """Itemized agent pricing breakdown. Produced by compute_agent_pricing."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    subtotal: float
    fees: float
    taxes: float
    total: float
    currency: str
    agent_commission: float
    agent_discount: float
    net_price: float


class Address(RezdyModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class CustomerRecord(RezdyModel):
    first_name: str = Field(..., description="Customer first name")
    last_name: str = Field(..., description="Customer last name")
    email: str = Field(..., description="Customer email address")
    phone: Optional[str] = Field(None, description="Customer phone number")
    date_of_birth: Optional[str] = Field(None, description="Date of birth (YYYY-MM-DD)")
    nationality: Optional[str] = Field(None, description="Customer nationality")
    address: Optional[Address] = Field(None, description="Customer address")


class Participant(RezdyModel):
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None


class BookingField(RezdyModel):
    field_id: int
    value: str


# Tool arguments

class ConfigureArgs(RezdyModel):
    api_key: str = Field(..., description="Rezdy Agent API key")
    environment: Literal["production", "staging"] = Field(
        "production", description="API environment (production or staging)"
    )


class SearchProductsParams(RezdyModel):
    limit: Optional[int] = Field(None, description="Maximum number of results")
    offset: Optional[int] = Field(None, description="Offset for pagination")
    product_code: Optional[str] = Field(None, description="Product code to filter by")
    name: Optional[str] = Field(None, description="Product name to search for")
    category_id: Optional[int] = Field(None, description="Category ID to filter by")
    supplier_id: Optional[int] = Field(None, description="Supplier ID to filter by")
    location: Optional[str] = Field(None, description="Location to filter by")
    region: Optional[str] = Field(None, description="Region to filter by")
    country: Optional[str] = Field(None, description="Country to filter by")
    min_price: Optional[float] = Field(None, description="Minimum price filter")
    max_price: Optional[float] = Field(None, description="Maximum price filter")
    duration: Optional[int] = Field(None, description="Duration in minutes")
    tags: Optional[List[str]] = Field(None, description="Tags to filter by")


class ProductIdArgs(RezdyModel):
    product_id: int = Field(..., description="Product ID")


class SearchAvailabilityParams(RezdyModel):
    product_id: int = Field(..., description="Product ID")
    start_date: str = Field(..., description="Start date (ISO 8601)")
    end_date: str = Field(..., description="End date (ISO 8601)")
    quantities: Optional[List[QuantityLine]] = Field(
        None, description="Quantities for pricing calculation"
    )
    limit: Optional[int] = Field(None, description="Maximum number of results")
    offset: Optional[int] = Field(None, description="Offset for pagination")


class QuoteBookingParams(RezdyModel):
    product_id: int = Field(..., description="Product ID")
    session_id: Optional[str] = Field(None, description="Session ID (optional for some booking modes)")
    start_time: Optional[str] = Field(None, description="Start time (ISO format, optional)")
    quantities: List[QuantityLine] = Field(..., description="Booking quantities")
    customer: Optional[CustomerRecord] = Field(None, description="Customer information (optional for quote)")
    agent_reference: Optional[str] = Field(None, description="Agent reference number")
    payment_type: Literal["MANUAL", "AUTOMATED"] = Field("MANUAL", description="Payment processing type")
    promo_code: Optional[str] = Field(None, description="Promotional code")


class CreateBookingParams(RezdyModel):
    product_id: int = Field(..., description="Product ID")
    session_id: Optional[str] = Field(None, description="Session ID (optional for some booking modes)")
    start_time: Optional[str] = Field(None, description="Start time (ISO format, optional)")
    quantities: List[QuantityLine] = Field(..., description="Booking quantities")
    customer: CustomerRecord = Field(..., description="Customer information")
    participants: Optional[List[Participant]] = Field(None, description="Additional participants")
    fields: Optional[List[BookingField]] = Field(None, description="Custom booking fields")
    agent_reference: Optional[str] = Field(None, description="Agent reference number")
    payment_type: Literal["MANUAL", "AUTOMATED"] = Field("MANUAL", description="Payment processing type")
    promo_code: Optional[str] = Field(None, description="Promotional code")
    notes: Optional[str] = Field(None, description="Booking notes")


class BookingIdArgs(RezdyModel):
    booking_id: str = Field(..., description="Booking ID")


class UpdateBookingParams(RezdyModel):
    customer: Optional[CustomerRecord] = Field(None, description="Updated customer information")
    participants: Optional[List[Participant]] = Field(None, description="Updated participants")
    fields: Optional[List[BookingField]] = Field(None, description="Updated custom fields")
    agent_reference: Optional[str] = Field(None, description="Updated agent reference")
    notes: Optional[str] = Field(None, description="Updated booking notes")


class UpdateBookingArgs(UpdateBookingParams):
    booking_id: str = Field(..., description="Booking ID")


class CancelBookingArgs(RezdyModel):
    booking_id: str = Field(..., description="Booking ID")
    reason: Optional[str] = Field(None, description="Cancellation reason")


class SearchCustomersParams(RezdyModel):
    limit: Optional[int] = Field(None, description="Maximum number of results")
    offset: Optional[int] = Field(None, description="Offset for pagination")
    email: Optional[str] = Field(None, description="Customer email to search for")
    first_name: Optional[str] = Field(None, description="Customer first name")
    last_name: Optional[str] = Field(None, description="Customer last name")
    phone: Optional[str] = Field(None, description="Customer phone number")


class CreateCustomerParams(CustomerRecord):
    notes: Optional[str] = Field(None, description="Customer notes")


class UpdateCustomerParams(RezdyModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[Address] = None
    notes: Optional[str] = None


class UpdateCustomerArgs(UpdateCustomerParams):
    customer_id: str = Field(..., description="Customer ID")


class CustomerIdArgs(RezdyModel):
    customer_id: str = Field(..., description="Customer ID")


class NoArgs(RezdyModel):
    pass


class CalculatePricingArgs(RezdyModel):
    base_price: float = Field(..., description="Base price before discounts, fees and taxes")
    commission_rate: float = Field(0, description="Agent commission in percent")
    discount_rate: float = Field(0, description="Agent discount in percent")
    fees: float = Field(0, description="Flat fees added to the discounted price")
    tax_rate: float = Field(0, description="Tax in percent of the discounted price")
    currency: str = Field("USD", description="Currency code")


class CalculateQuantityPricingArgs(RezdyModel):
    quantities: List[QuantityLine] = Field(..., description="Selected quantities")
    pricing: List[PriceTableEntry] = Field(..., description="Price options from an availability session")
    use_agent_pricing: bool = Field(False, description="Prefer agent prices when available")
    currency: str = Field("USD", description="Currency code used for display")
