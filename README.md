# aiiobackend

A small order-placement backend. It models users, products with a stock level
and orders, stores them through SQLAlchemy, and includes a query builder that
turns filter objects into SQL conditions.

## Installation

```
pip install .
```

With the test tools:

```
pip install .[test]
```

Connecting to PostgreSQL also needs a PostgreSQL driver that SQLAlchemy can
use; it is not installed with this package.

## Configuration

`aiiobackend.config.get_database_config()` reads the connection settings from
these environment variables, using the default when a variable is unset or
empty:

| Variable      | Default        |
|---------------|----------------|
| `DB_HOST`     | `localhost`    |
| `DB_PORT`     | `5432`         |
| `DB_USER`     | `postgres`     |
| `DB_PASSWORD` | `password`     |
| `DB_NAME`     | `aiio_backend` |
| `DB_SSLMODE`  | `disable`      |

It returns a `DatabaseConfig`. `build_dsn()` gives the settings as a libpq
keyword/value string and `url()` as a `postgresql://` SQLAlchemy URL carrying
`sslmode` as a query parameter.

`connect_database(url=None)` opens an engine (from the environment when no URL
is given), checks that a connection can be made, creates the `users`,
`products` and `orders` tables if they are missing, and returns the engine.
Failures to connect or to create the tables are raised as `RuntimeError`.

## Running

```
aiiobackend
```

If a `.env` file is in the working directory its variables are loaded first.
The command connects to the database, creates the tables, logs that the
application started, closes the engine and exits with status 0. If the
connection or table creation fails it logs the error and exits with status 1.

## Domain

`aiiobackend.domain` holds the SQLAlchemy models (sharing the declarative
`Base`) and the repository protocols:

- `User` with `id`, `active`, `email`; `activate()` sets `active` to true.
- `Product` with `id`, `name`, `stock`; `reserve(qty)` takes `qty` out of
  stock or raises `InsufficientStockError` when there is not enough.
- `Order` with `id`, `user_id`, `product_id`, `quantity`, `status` and the
  `user` and `product` relationships; `confirm()` sets the status to
  `CONFIRMED`. `new_order(user_id, product_id, quantity)` creates a `PENDING`
  order.
- `UserRepository`, `ProductRepository` and `OrderRepository` describe the
  storage that the order command works with.

`aiiobackend.repositories` implements them over an SQLAlchemy session:
`SqlUserRepository`, `SqlProductRepository` and `SqlOrderRepository`. Each
`save` commits; `SqlProductRepository.update_stock` writes only the stock
column; `SqlOrderRepository.get_by_id` loads the order's user and product too.
A missing row raises `RecordNotFoundError`.

## Placing an order

```python
from sqlalchemy.orm import Session

from aiiobackend.config import connect_database
from aiiobackend.domain import Product, User
from aiiobackend.place_order import PlaceOrderCommand, PlaceOrderHandler
from aiiobackend.repositories import (
    SqlOrderRepository,
    SqlProductRepository,
    SqlUserRepository,
)

engine = connect_database("sqlite://")
with Session(engine) as session:
    session.add_all([
        User(id=1, email="someone@example.com", active=True),
        Product(id=1, name="Widget", stock=10),
    ])
    session.commit()

    handler = PlaceOrderHandler(
        order_repo=SqlOrderRepository(session),
        user_repo=SqlUserRepository(session),
        product_repo=SqlProductRepository(session),
    )
    order = handler.handle(PlaceOrderCommand(user_id=1, product_id=1, quantity=2))
```

`handle` looks up the user and the product, reserves the stock, saves the new
stock level and a `CONFIRMED` order, and returns the order. Any error from the
user lookup is raised as `UserNotFoundError` and any from the product lookup as
`ProductNotFoundError`; too little stock raises `InsufficientStockError` and
nothing is saved. Errors from saving are passed on unchanged.

## Querying with filters

```python
from aiiobackend.domain import Product
from aiiobackend.filters import ProductFilter
from aiiobackend.query import QueryBuilder, SortOrder

statement = (
    QueryBuilder(Product)
    .apply_filters(ProductFilter(name="Widget", min_stock=5))
    .add_sort("id", SortOrder.ASC)
    .set_pagination(1, 20)
    .build()
)
rows = session.scalars(statement).all()
```

`QueryBuilder(model)` collects filters (`add_filter`, `add_filters`,
`apply_filters`), eager loads (`add_preload`, `add_custom_preload`),
`set_distinct`, `add_group_by`, `add_having` (an expression, or text with `?`
placeholders), `add_sort` and `set_pagination`, and `build()` returns a
`Select`. Filters support every `Operator`: `=`, `!=`, `>`, `<`, `>=`, `<=`,
`IN`, `NOT IN`, `IS NULL`, `IS NOT NULL`, and `CONTAINS`, `STARTS_WITH`,
`ENDS_WITH` as `LIKE` patterns on string values. Naming a column or
relationship the model lacks raises `ValueError` when building.

Filter objects are dataclasses whose fields are declared with
`filter_field(column, operator)`; fields without one use the snake_case of
the field name and `=`. `apply_filters` leaves out fields that are `None`,
zero, or an empty string or collection; an explicit `False` still applies.
`aiiobackend.filters` provides `ProductFilter`, `UserFilter`, `OrderFilter`,
`ProductSearchFilter`, `UserSearchFilter` and `OrderReportFilter`.

`aiiobackend.helpers` adds:

- `find_with_pagination(session, model, page, page_size, statement=None)`,
  returning a `PaginatedResult` with `data`, `total`, `page`, `page_size` and
  `total_pages`.
- `CommonFilters`, with ready-made `FilterField`s: `search_by_name`,
  `filter_by_status`, `filter_by_active`, `filter_by_ids`,
  `filter_by_date_range`, `filter_by_user_id`, `filter_by_product_id`.
- `BaseRepository(session)`, with `query_builder`, `find_with_filters`,
  `find_one_with_filters` (first row by primary key, or
  `RecordNotFoundError`) and `count_with_filters`.

## What it does not do

There is no HTTP server or other API: the `aiiobackend` command only prepares
the database and exits. Orders are placed by calling `PlaceOrderHandler` from
Python code.