import pytest

from aiiobackend.domain import InsufficientStockError, Order, Product, User
from aiiobackend.place_order import (
    PlaceOrderCommand,
    PlaceOrderHandler,
    ProductNotFoundError,
    UserNotFoundError,
)


class RepoFailure(Exception):
    pass


class MockUserRepository:
    def __init__(self, users=None, err=None):
        self.users = dict(users or {})
        self.err = err

    def get_by_id(self, user_id):
        if self.err is not None:
            raise self.err
        try:
            return self.users[user_id]
        except KeyError:
            raise LookupError("user not found") from None

    def save(self, user):
        if self.err is not None:
            raise self.err
        self.users[user.id] = user


class MockProductRepository:
    def __init__(self, products=None, err=None):
        self.products = dict(products or {})
        self.err = err

    def get_by_id(self, product_id):
        if self.err is not None:
            raise self.err
        try:
            return self.products[product_id]
        except KeyError:
            raise LookupError("product not found") from None

    def save(self, product):
        if self.err is not None:
            raise self.err
        self.products[product.id] = product

    def update_stock(self, product):
        self.save(product)


class MockOrderRepository:
    def __init__(self, err=None):
        self.orders = {}
        self.err = err

    def save(self, order):
        if self.err is not None:
            raise self.err
        order.id = len(self.orders) + 1
        self.orders[order.id] = order

    def get_by_id(self, order_id):
        if self.err is not None:
            raise self.err
        try:
            return self.orders[order_id]
        except KeyError:
            raise LookupError("order not found") from None


def make_user():
    return User(id=1, email="test@example.com", active=True)


def make_handler(users=None, products=None, order_err=None):
    user_repo = MockUserRepository(users)
    product_repo = MockProductRepository(products)
    order_repo = MockOrderRepository(order_err)
    handler = PlaceOrderHandler(
        order_repo=order_repo, user_repo=user_repo, product_repo=product_repo
    )
    return handler, user_repo, product_repo, order_repo


def test_handle_success():
    handler, _, product_repo, order_repo = make_handler(
        users={1: make_user()},
        products={1: Product(id=1, name="Test Product", stock=10)},
    )
    handler.handle(PlaceOrderCommand(user_id=1, product_id=1, quantity=2))

    assert product_repo.get_by_id(1).stock == 8
    assert len(order_repo.orders) == 1
    order = next(iter(order_repo.orders.values()))
    assert order.user_id == 1
    assert order.product_id == 1
    assert order.quantity == 2
    assert order.status == "CONFIRMED"


def test_handle_returns_saved_order():
    handler, _, _, order_repo = make_handler(
        users={1: make_user()},
        products={1: Product(id=1, name="Test Product", stock=10)},
    )
    order = handler.handle(PlaceOrderCommand(1, 1, 2))
    assert isinstance(order, Order)
    assert order_repo.get_by_id(order.id) is order


def test_handle_user_not_found():
    handler, *_ = make_handler(users={})
    with pytest.raises(UserNotFoundError) as excinfo:
        handler.handle(PlaceOrderCommand(user_id=999, product_id=1, quantity=2))
    assert str(excinfo.value) == "user not found"


def test_handle_product_not_found():
    handler, *_ = make_handler(users={1: make_user()}, products={})
    with pytest.raises(ProductNotFoundError) as excinfo:
        handler.handle(PlaceOrderCommand(user_id=1, product_id=999, quantity=2))
    assert str(excinfo.value) == "product not found"


def test_handle_insufficient_stock():
    handler, _, _, order_repo = make_handler(
        users={1: make_user()},
        products={1: Product(id=1, name="Test Product", stock=1)},
    )
    with pytest.raises(InsufficientStockError) as excinfo:
        handler.handle(PlaceOrderCommand(user_id=1, product_id=1, quantity=5))
    assert str(excinfo.value) == "insufficient stock"
    assert len(order_repo.orders) == 0


def test_handle_repository_error():
    handler, *_ = make_handler(
        users={1: make_user()},
        products={1: Product(id=1, name="Test Product", stock=10)},
        order_err=RepoFailure("database connection failed"),
    )
    with pytest.raises(RepoFailure) as excinfo:
        handler.handle(PlaceOrderCommand(user_id=1, product_id=1, quantity=2))
    assert str(excinfo.value) == "database connection failed"


def test_handle_with_reusable_mocks_large_stock():
    handler, _, product_repo, order_repo = make_handler(
        users={1: make_user()},
        products={1: Product(id=1, name="Test Product", stock=1000000)},
    )
    cmd = PlaceOrderCommand(user_id=1, product_id=1, quantity=1)
    for _ in range(3):
        product_repo.products[1].stock = 1000000
        handler.handle(cmd)
        assert product_repo.products[1].stock == 999999
    assert sorted(order_repo.orders) == [1, 2, 3]


def test_handle_user_not_found_with_empty_product_repo():
    handler, _, _, order_repo = make_handler(users={}, products=None)
    with pytest.raises(UserNotFoundError):
        handler.handle(PlaceOrderCommand(user_id=999, product_id=1, quantity=1))
    assert order_repo.orders == {}