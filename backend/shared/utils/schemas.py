"""
Shared Pydantic schemas used across the application.

JSON on the wire is camelCase; Python attributes stay snake_case.
All schemas accept either spelling on input.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from shared.config.constants import (
    Limits,
    OrderStatus,
    RecipeDifficulty,
    ReservationStatus,
    StockStatus,
    TableStatus,
    UNLIMITED,
    is_low_stock,
)


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, populated from ORM attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# =============================================================================
# Common
# =============================================================================

OrderType = Literal["dine-in", "takeout", "delivery"]


class MessageResponse(CamelModel):
    """Plain acknowledgement."""

    message: str


class PaginationMeta(CamelModel):
    """Page metadata returned with paginated lists."""

    page: int
    limit: int
    total: int
    pages: int


# =============================================================================
# Accounts and Authentication
# =============================================================================


class RegisterRequest(CamelModel):
    """Registration of a new restaurant account."""

    email: EmailStr
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH)
    first_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    last_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    restaurant_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    phone: str | None = None
    address: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("first_name", "last_name", "restaurant_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)


class LoginRequest(CamelModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AccountOutput(CamelModel):
    """Account (tenant) as exposed to its owner."""

    id: int
    email: str
    first_name: str
    last_name: str
    restaurant_name: str
    restaurant_address: str | None = None
    phone: str | None = None
    role: str
    subscription_plan: str
    subscription_status: str
    subscription_expires_at: datetime | None = None


class AuthResponse(CamelModel):
    """Token plus account returned by register and login."""

    message: str | None = None
    token: str
    user: AccountOutput


class AccountEnvelope(CamelModel):
    user: AccountOutput


class ProfileUpdate(CamelModel):
    """Editable profile fields; omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    last_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    restaurant_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    phone: str | None = None
    address: str | None = None

    @field_validator("first_name", "last_name", "restaurant_name")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH)


# =============================================================================
# Orders
# =============================================================================


class OrderLineItem(BaseModel):
    """
    One line of an order.

    Orders store their lines as a JSON document; this is the typed view of
    each entry. Unknown keys sent by the client (modifiers, images) are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str | None = None
    category: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    notes: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderCreate(CamelModel):
    """New order. Totals are taken as sent by the point of sale."""

    table_id: int | None = None
    customer_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    customer_phone: str | None = None
    order_type: OrderType = "dine-in"
    items: list[OrderLineItem] = Field(min_length=1)
    subtotal: float
    tax: float = 0
    tip: float = 0
    total: float
    special_instructions: str | None = None


class OrderUpdate(CamelModel):
    """Partial order update. Status changes go through the status endpoint."""

    table_id: int | None = None
    customer_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    customer_phone: str | None = None
    order_type: OrderType | None = None
    items: list[OrderLineItem] | None = Field(default=None, min_length=1)
    subtotal: float | None = None
    tax: float | None = None
    tip: float | None = None
    total: float | None = None
    special_instructions: str | None = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class TableSummary(CamelModel):
    """Table fields embedded in orders and reservations."""

    id: int
    table_number: int
    capacity: int
    location: str | None = None
    status: str


class OrderOutput(CamelModel):
    id: int
    table_id: int | None = None
    table: TableSummary | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    order_type: str
    items: list[OrderLineItem]
    subtotal: float
    tax: float
    tip: float
    total: float
    special_instructions: str | None = None
    status: OrderStatus
    created_at: datetime
    updated_at: datetime | None = None


class OrderEnvelope(CamelModel):
    message: str | None = None
    order: OrderOutput


class OrderList(CamelModel):
    orders: list[OrderOutput]
    pagination: PaginationMeta


class OrderAnalytics(CamelModel):
    """Aggregates over a tenant's orders in an optional date range."""

    total_orders: int
    total_revenue: float
    average_order_value: float
    status_breakdown: dict[str, int]


# =============================================================================
# Tables and Reservations
# =============================================================================


class TableCreate(CamelModel):
    table_number: int = Field(ge=1)
    capacity: int = Field(ge=1)
    location: str | None = None
    x_position: float = 0
    y_position: float = 0
    status: TableStatus = TableStatus.AVAILABLE


class TableUpdate(CamelModel):
    table_number: int | None = Field(default=None, ge=1)
    capacity: int | None = Field(default=None, ge=1)
    location: str | None = None
    x_position: float | None = None
    y_position: float | None = None
    status: TableStatus | None = None


class OrderBrief(CamelModel):
    id: int
    status: str
    customer_name: str | None = None
    total: float
    created_at: datetime


class ReservationBrief(CamelModel):
    id: int
    customer_name: str
    party_size: int
    reservation_date: datetime
    duration_minutes: int
    status: str


class TableOutput(CamelModel):
    id: int
    table_number: int
    capacity: int
    location: str | None = None
    x_position: float
    y_position: float
    status: TableStatus
    created_at: datetime
    updated_at: datetime | None = None
    active_orders: list[OrderBrief] = Field(default_factory=list)
    upcoming_reservations: list[ReservationBrief] = Field(default_factory=list)


class TableEnvelope(CamelModel):
    message: str | None = None
    table: TableOutput


class TableList(CamelModel):
    tables: list[TableOutput]


class ReservationCreate(CamelModel):
    table_id: int | None = None
    customer_name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    customer_phone: str | None = None
    customer_email: EmailStr | None = None
    party_size: int = Field(ge=1)
    reservation_date: datetime
    duration_minutes: int = Field(default=120, ge=1)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    special_requests: str | None = None

    @field_validator("customer_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)


class ReservationUpdate(CamelModel):
    table_id: int | None = None
    customer_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    customer_phone: str | None = None
    customer_email: EmailStr | None = None
    party_size: int | None = Field(default=None, ge=1)
    reservation_date: datetime | None = None
    duration_minutes: int | None = Field(default=None, ge=1)
    status: ReservationStatus | None = None
    special_requests: str | None = None

    @field_validator("customer_name")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class ReservationOutput(CamelModel):
    id: int
    table_id: int | None = None
    table: TableSummary | None = None
    customer_name: str
    customer_phone: str | None = None
    customer_email: str | None = None
    party_size: int
    reservation_date: datetime
    duration_minutes: int
    status: ReservationStatus
    special_requests: str | None = None
    created_at: datetime


class ReservationEnvelope(CamelModel):
    message: str | None = None
    reservation: ReservationOutput


class ReservationList(CamelModel):
    reservations: list[ReservationOutput]


# =============================================================================
# Inventory and Suppliers
# =============================================================================


class InventoryItemCreate(CamelModel):
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    category: str | None = None
    current_stock: float
    unit: str = Field(min_length=1, max_length=50)
    min_stock: float = 0
    cost_per_unit: float | None = None
    supplier: str | None = None
    supplier_contact: str | None = None
    last_restocked: datetime | None = None
    expiry_date: datetime | None = None
    location: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)


class InventoryItemUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    category: str | None = None
    current_stock: float | None = None
    unit: str | None = Field(default=None, min_length=1, max_length=50)
    min_stock: float | None = None
    cost_per_unit: float | None = None
    supplier: str | None = None
    supplier_contact: str | None = None
    last_restocked: datetime | None = None
    expiry_date: datetime | None = None
    location: str | None = None
    notes: str | None = None


class InventoryItemOutput(CamelModel):
    id: int
    name: str
    category: str | None = None
    current_stock: float
    unit: str
    min_stock: float
    cost_per_unit: float | None = None
    supplier: str | None = None
    supplier_contact: str | None = None
    last_restocked: datetime | None = None
    expiry_date: datetime | None = None
    location: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @computed_field(alias="isLowStock")
    @property
    def is_low_stock(self) -> bool:
        return is_low_stock(self.current_stock, self.min_stock)

    @computed_field(alias="status")
    @property
    def status(self) -> str:
        return StockStatus.LOW if self.is_low_stock else StockStatus.GOOD


class InventoryItemEnvelope(CamelModel):
    message: str | None = None
    item: InventoryItemOutput


class InventoryItemList(CamelModel):
    items: list[InventoryItemOutput]
    pagination: PaginationMeta | None = None


class SupplierCreate(CamelModel):
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    contact_person: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    payment_terms: str | None = None
    delivery_schedule: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)


class SupplierUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    contact_person: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    payment_terms: str | None = None
    delivery_schedule: str | None = None
    notes: str | None = None


class SupplierOutput(CamelModel):
    id: int
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    payment_terms: str | None = None
    delivery_schedule: str | None = None
    notes: str | None = None
    is_active: bool
    created_at: datetime


class SupplierEnvelope(CamelModel):
    message: str | None = None
    supplier: SupplierOutput


class SupplierList(CamelModel):
    suppliers: list[SupplierOutput]


# =============================================================================
# Recipes
# =============================================================================


class RecipeCreate(CamelModel):
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: str = Field(min_length=1, max_length=100)
    difficulty: RecipeDifficulty
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    cost_per_serving: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    ingredients: list[dict[str, Any]] = Field(default_factory=list)
    instructions: list[Any] = Field(default_factory=list)
    nutritional_info: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _strip_required(v)


class RecipeUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    difficulty: RecipeDifficulty | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    cost_per_serving: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    ingredients: list[dict[str, Any]] | None = None
    instructions: list[Any] | None = None
    nutritional_info: dict[str, Any] | None = None
    tags: list[str] | None = None


class RecipeOutput(CamelModel):
    id: int
    name: str
    description: str | None = None
    category: str
    difficulty: str
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    cost_per_serving: float | None = None
    image_url: str | None = None
    ingredients: list[dict[str, Any]] = Field(default_factory=list)
    instructions: list[Any] = Field(default_factory=list)
    nutritional_info: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class RecipeEnvelope(CamelModel):
    message: str | None = None
    recipe: RecipeOutput


class RecipeList(CamelModel):
    recipes: list[RecipeOutput]
    pagination: PaginationMeta


# =============================================================================
# Analytics
# =============================================================================


class DailyRevenue(CamelModel):
    date: str
    revenue: float
    orders: int


class PopularItem(CamelModel):
    name: str
    category: str | None = None
    quantity: int
    revenue: float


class TableUtilization(CamelModel):
    table_id: int
    table_number: int
    total_orders: int
    revenue: float


class DashboardOutput(CamelModel):
    today_orders: int
    today_revenue: float
    weekly_orders: int
    monthly_revenue: float
    low_stock_items: int
    active_tables: int
    revenue_data: list[DailyRevenue]
    popular_items: list[PopularItem]
    table_utilization: list[TableUtilization]


class SalesOutput(CamelModel):
    period: str
    total_revenue: float
    total_orders: int
    data: list[DailyRevenue]


class PopularItemsOutput(CamelModel):
    items: list[PopularItem]


# =============================================================================
# Subscriptions
# =============================================================================


class PlanDetails(CamelModel):
    name: str
    price: float
    features: list[str]
    limits: dict[str, int]


class CurrentSubscription(CamelModel):
    plan: str
    status: str
    expires_at: datetime | None = None
    plan_details: PlanDetails


class PlanChange(CamelModel):
    plan: str


class PlanChangeResponse(CamelModel):
    message: str
    plan: str
    status: str
    expires_at: datetime


class UsageCounter(CamelModel):
    used: int
    limit: int

    @computed_field
    @property
    def unlimited(self) -> bool:
        return self.limit == UNLIMITED


class UsageOutput(CamelModel):
    plan: str
    recipes: UsageCounter
    tables: UsageCounter
    orders: UsageCounter
