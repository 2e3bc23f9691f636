"""Domain models for users, products and orders, and the repository contracts."""

from __future__ import annotations

from typing import Optional, Protocol

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# 64-bit keys on real servers; SQLite only auto-increments plain INTEGER keys.
_ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")

ORDER_PENDING = "PENDING"
ORDER_CONFIRMED = "CONFIRMED"


class Base(DeclarativeBase):
    """Declarative base shared by every persisted model."""


class InsufficientStockError(ValueError):
    """Raised when a product cannot cover the requested quantity."""

    def __init__(self, message: str = "insufficient stock") -> None:
        super().__init__(message)


class User(Base):
    """A customer account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True)
    active: Mapped[bool] = mapped_column(nullable=False, default=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("active", False)
        kwargs.setdefault("email", "")
        super().__init__(**kwargs)

    def activate(self) -> None:
        """Mark the account as active."""
        self.active = True


class Product(Base):
    """A product with a stock level."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0)

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("name", "")
        kwargs.setdefault("stock", 0)
        super().__init__(**kwargs)

    def reserve(self, qty: int) -> None:
        """Take ``qty`` units out of stock, or raise if there are not enough."""
        if self.stock < qty:
            raise InsufficientStockError()
        self.stock -= qty


class Order(Base):
    """An order of one product by one user."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True)
    user_id: Mapped[int] = mapped_column(_ID_TYPE, ForeignKey("users.id"))
    user: Mapped[Optional[User]] = relationship(foreign_keys=[user_id])
    product_id: Mapped[int] = mapped_column(_ID_TYPE, ForeignKey("products.id"))
    product: Mapped[Optional[Product]] = relationship(foreign_keys=[product_id])
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("quantity", 0)
        kwargs.setdefault("status", "")
        super().__init__(**kwargs)

    def confirm(self) -> None:
        """Mark the order as confirmed."""
        self.status = ORDER_CONFIRMED


def new_order(user_id: int, product_id: int, quantity: int) -> Order:
    """Create a pending order."""
    return Order(
        user_id=user_id,
        product_id=product_id,
        quantity=quantity,
        status=ORDER_PENDING,
    )


class UserRepository(Protocol):
    """Storage for users."""

    def get_by_id(self, user_id: int) -> User:
        """Return the user with this id, raising if there is none."""

    def save(self, user: User) -> None:
        """Insert or update the user."""


class ProductRepository(Protocol):
    """Storage for products."""

    def get_by_id(self, product_id: int) -> Product:
        """Return the product with this id, raising if there is none."""

    def save(self, product: Product) -> None:
        """Insert or update the product."""

    def update_stock(self, product: Product) -> None:
        """Persist the product's stock level only."""


class OrderRepository(Protocol):
    """Storage for orders."""

    def save(self, order: Order) -> None:
        """Insert a new order, assigning its id."""

    def get_by_id(self, order_id: int) -> Order:
        """Return the order with its user and product, raising if there is none."""