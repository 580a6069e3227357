import logging
from typing import Optional

from academic_records.config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging from settings.LOG_LEVEL (or an explicit level)."""
    level = level or settings.LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # SQLAlchemy echoes every statement at INFO; keep it quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info("✅ %s v%s logging at %s (env=%s)", settings.APP_TITLE, settings.APP_VERSION, level, settings.ENV)
