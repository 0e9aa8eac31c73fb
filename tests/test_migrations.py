import importlib.util
from pathlib import Path

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from libreria.models import Base

VERSIONS = Path(__file__).resolve().parent.parent / "alembic" / "versions"
INDEX_OPS = {"add_index", "remove_index", "add_constraint", "remove_constraint"}


def _load(name):
    spec = importlib.util.spec_from_file_location(name, VERSIONS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_migrations_create_the_model_indexes():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            _load("001_create_users_books").upgrade()
            _load("002_create_reservations").upgrade()

        diff = compare_metadata(MigrationContext.configure(conn), Base.metadata)

    index_diff = [d for d in diff if isinstance(d, tuple) and d[0] in INDEX_OPS]
    assert index_diff == []

    with engine.connect() as conn:
        indexes = {ix["name"]: ix for ix in inspect(conn).get_indexes("books")}
    assert indexes["ix_books_external_id"]["unique"]
    engine.dispose()
