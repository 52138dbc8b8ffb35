"""Database seeding helpers."""

import logging

from sqlalchemy.orm import Session

from storefront.services.settings_service import ensure_default_settings

logger = logging.getLogger(__name__)


def ensure_seed_data(session: Session) -> None:
    """Create the settings rows every storefront page reads."""
    ensure_default_settings(session)
    logger.info("[BOOTSTRAP] Default settings present.")
