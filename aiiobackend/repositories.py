"""SQL-backed implementations of the domain repositories."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from aiiobackend.domain import Order, Product, User


class RecordNotFoundError(LookupError):
    """Raised when no row matches the requested primary key."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


def _commit(session: Session) -> None:
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise


def _upsert(session: Session, instance) -> None:
    """Insert or update ``instance`` and copy the stored id back onto it."""
    try:
        merged = session.merge(instance)
    except Exception:
        session.rollback()
        raise
    _commit(session)
    instance.id = merged.id


class SqlUserRepository:
    """User storage over an SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> User:
        user = self._session.get(User, user_id)
        if user is None:
            raise RecordNotFoundError()
        return user

    def save(self, user: User) -> None:
        _upsert(self._session, user)


class SqlProductRepository:
    """Product storage over an SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: int) -> Product:
        product = self._session.get(Product, product_id)
        if product is None:
            raise RecordNotFoundError()
        return product

    def save(self, product: Product) -> None:
        _upsert(self._session, product)

    def update_stock(self, product: Product) -> None:
        if product.id is None:
            raise ValueError("missing primary key for stock update")
        self._session.execute(
            update(Product).where(Product.id == product.id).values(stock=product.stock)
        )
        _commit(self._session)


class SqlOrderRepository:
    """Order storage over an SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, order: Order) -> None:
        self._session.add(order)
        _commit(self._session)

    def get_by_id(self, order_id: int) -> Order:
        statement = (
            select(Order)
            .options(selectinload(Order.user), selectinload(Order.product))
            .where(Order.id == order_id)
        )
        order = self._session.scalars(statement).first()
        if order is None:
            raise RecordNotFoundError()
        return order