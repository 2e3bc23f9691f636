"""Ready-made filter objects for products, users and orders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from aiiobackend.query import Operator, filter_field


@dataclass
class ProductFilter:
    """Filters for product queries."""

    id: Optional[int] = filter_field("id")
    name: Optional[str] = filter_field("name", Operator.CONTAINS)
    min_stock: Optional[int] = filter_field("stock", Operator.GREATER_OR_EQUAL)
    max_stock: Optional[int] = filter_field("stock", Operator.LESS_OR_EQUAL)
    stock_greater: Optional[int] = filter_field("stock", Operator.GREATER_THAN)
    ids: Optional[list[int]] = filter_field("id", Operator.IN)


@dataclass
class UserFilter:
    """Filters for user queries."""

    id: Optional[int] = filter_field("id")
    email: Optional[str] = filter_field("email", Operator.CONTAINS)
    active: Optional[bool] = filter_field("active")
    ids: Optional[list[int]] = filter_field("id", Operator.IN)


@dataclass
class OrderFilter:
    """Filters for order queries."""

    id: Optional[int] = filter_field("id")
    user_id: Optional[int] = filter_field("user_id")
    product_id: Optional[int] = filter_field("product_id")
    status: Optional[str] = filter_field("status")
    min_quantity: Optional[int] = filter_field("quantity", Operator.GREATER_OR_EQUAL)
    max_quantity: Optional[int] = filter_field("quantity", Operator.LESS_OR_EQUAL)
    user_ids: Optional[list[int]] = filter_field("user_id", Operator.IN)
    product_ids: Optional[list[int]] = filter_field("product_id", Operator.IN)
    statuses: Optional[list[str]] = filter_field("status", Operator.IN)
    created_after: Optional[datetime] = filter_field("created_at", Operator.GREATER_OR_EQUAL)
    created_before: Optional[datetime] = filter_field("created_at", Operator.LESS_OR_EQUAL)


@dataclass
class ProductSearchFilter:
    """Filters for broad product searches."""

    search_term: Optional[str] = filter_field("name", Operator.CONTAINS)
    min_price: Optional[float] = filter_field("price", Operator.GREATER_OR_EQUAL)
    max_price: Optional[float] = filter_field("price", Operator.LESS_OR_EQUAL)
    in_stock: Optional[bool] = filter_field("stock", Operator.GREATER_THAN)

    category_ids: Optional[list[int]] = filter_field("category_id", Operator.IN)
    brand_ids: Optional[list[int]] = filter_field("brand_id", Operator.IN)
    tags: Optional[list[str]] = filter_field("tags", Operator.IN)

    created_after: Optional[datetime] = filter_field("created_at", Operator.GREATER_OR_EQUAL)
    created_before: Optional[datetime] = filter_field("created_at", Operator.LESS_OR_EQUAL)
    updated_after: Optional[datetime] = filter_field("updated_at", Operator.GREATER_OR_EQUAL)


@dataclass
class UserSearchFilter:
    """Filters for broad user searches."""

    search_term: Optional[str] = filter_field("email", Operator.CONTAINS)
    active: Optional[bool] = filter_field("active")
    role_ids: Optional[list[int]] = filter_field("role_id", Operator.IN)
    department_ids: Optional[list[int]] = filter_field("department_id", Operator.IN)
    created_after: Optional[datetime] = filter_field("created_at", Operator.GREATER_OR_EQUAL)
    last_login_after: Optional[datetime] = filter_field(
        "last_login_at", Operator.GREATER_OR_EQUAL
    )


@dataclass
class OrderReportFilter:
    """Filters for order reports."""

    user_ids: Optional[list[int]] = filter_field("user_id", Operator.IN)
    product_ids: Optional[list[int]] = filter_field("product_id", Operator.IN)
    statuses: Optional[list[str]] = filter_field("status", Operator.IN)
    min_amount: Optional[float] = filter_field("total_amount", Operator.GREATER_OR_EQUAL)
    max_amount: Optional[float] = filter_field("total_amount", Operator.LESS_OR_EQUAL)
    date_from: Optional[datetime] = filter_field("created_at", Operator.GREATER_OR_EQUAL)
    date_to: Optional[datetime] = filter_field("created_at", Operator.LESS_OR_EQUAL)
    payment_method: Optional[str] = filter_field("payment_method")