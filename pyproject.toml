[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aiiobackend"
version = "0.1.0"
description = "Order placement with users, products and stock, SQL repositories and a filter-driven query builder over SQLAlchemy"
requires-python = ">=3.10"
keywords = ["orders", "inventory", "repository", "query-builder", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "sqlalchemy>=2.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
aiiobackend = "aiiobackend.main:main"

[tool.hatch.build.targets.wheel]
packages = ["aiiobackend"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
