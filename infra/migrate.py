from pathlib import Path
import logging

from alembic import command
from alembic.config import Config

from infra.path import database_url

logger = logging.getLogger(__name__)

# infra/migrate.py -> infra -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SCRIPT_LOCATION = PROJECT_ROOT / "migration"


def run_migrations(db_url: str | None = None) -> None:
    url = db_url or database_url()

    if not SCRIPT_LOCATION.exists():
        raise RuntimeError(f"Alembic script_location missing: {SCRIPT_LOCATION}")

    alembic_ini = SCRIPT_LOCATION / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    cfg.set_main_option("sqlalchemy.url", url)

    logger.info("Upgrading schema at %s", url)
    command.upgrade(cfg, "head")
