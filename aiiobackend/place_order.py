"""The command that places an order against stock."""

from __future__ import annotations

from dataclasses import dataclass

from aiiobackend.domain import (
    Order,
    OrderRepository,
    ProductRepository,
    UserRepository,
    new_order,
)


class UserNotFoundError(LookupError):
    """Raised when the ordering user does not exist."""

    def __init__(self, message: str = "user not found") -> None:
        super().__init__(message)


class ProductNotFoundError(LookupError):
    """Raised when the ordered product does not exist."""

    def __init__(self, message: str = "product not found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class PlaceOrderCommand:
    """A request to order ``quantity`` units of a product for a user."""

    user_id: int
    product_id: int
    quantity: int


@dataclass
class PlaceOrderHandler:
    """Reserves stock and records a confirmed order."""

    order_repo: OrderRepository
    user_repo: UserRepository
    product_repo: ProductRepository

    def handle(self, cmd: PlaceOrderCommand) -> Order:
        """Place the order and return it once saved."""
        try:
            user = self.user_repo.get_by_id(cmd.user_id)
        except Exception as exc:
            raise UserNotFoundError() from exc

        try:
            product = self.product_repo.get_by_id(cmd.product_id)
        except Exception as exc:
            raise ProductNotFoundError() from exc

        product.reserve(cmd.quantity)

        order = new_order(user.id, product.id, cmd.quantity)
        order.confirm()

        self.product_repo.update_stock(product)
        self.order_repo.save(order)
        return order