import os
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import func, inspect, select
from sqlalchemy.orm import sessionmaker

from app.dealerscope.db.models import Department, Store, StoreGroup, User
from app.dealerscope.db.seed import run_seed
from app.dealerscope.db.session import build_engine


def _run_migrations(database_url: str):
    os.environ["DATABASE_URL"] = database_url
    config = Config("alembic.ini")
    config.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(config, "head")


def test_migrations_apply(tmp_path: Path):
    db_path = tmp_path / "migrations.db"
    database_url = f"sqlite+pysqlite:///{db_path}"
    _run_migrations(database_url)

    engine = build_engine(database_url)
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())

    for table in (
        "store_groups",
        "stores",
        "users",
        "user_store_access",
        "departments",
        "user_department_access",
        "kpi_definitions",
        "scorecard_entries",
        "rocks",
        "todos",
    ):
        assert table in tables

    indexes = [index["name"] for index in inspector.get_indexes("rocks")]
    assert indexes.count("ix_rocks_department_period") == 1


def test_seed_is_idempotent(tmp_path: Path):
    db_path = tmp_path / "seed.db"
    database_url = f"sqlite+pysqlite:///{db_path}"
    _run_migrations(database_url)

    engine = build_engine(database_url)
    SessionLocal = sessionmaker(bind=engine, future=True)

    with SessionLocal() as db:
        run_seed(db)
        counts = [
            db.scalar(select(func.count()).select_from(model)) for model in (StoreGroup, Store, Department, User)
        ]

        run_seed(db)
        counts_after = [
            db.scalar(select(func.count()).select_from(model)) for model in (StoreGroup, Store, Department, User)
        ]

        assert counts_after == counts
        assert counts == [1, 1, 3, 1]

        admin = db.execute(select(User)).scalars().one()
        assert admin.role == "super_admin"
        assert admin.store_id is None
        assert admin.store_group_id is not None
