from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from storefront.db.base import Base

ROOT = Path(__file__).resolve().parents[1]


def test_alembic_upgrade_creates_every_model_table(tmp_path: Path) -> None:
    db_url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", db_url)
    config.attributes["configure_logger"] = False
    config.attributes["keep_url"] = True

    command.upgrade(config, "head")

    tables = set(inspect(create_engine(db_url)).get_table_names())
    assert set(Base.metadata.tables) <= tables
    assert "alembic_version" in tables
