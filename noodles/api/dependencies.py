"""Route Dependencies — builds the RecognitionLedger for each request.

Design Decisions:
    - Ledger built per request from the process-wide persistence handle;
      tests swap it out with app.dependency_overrides[get_ledger]
"""

from fastapi import Depends

from noodles.config import Settings, get_settings
from noodles.infrastructure.database import DatabaseSessionManager, get_db_manager
from noodles.services.recognition_ledger import RecognitionLedger


def get_ledger(
    settings: Settings = Depends(get_settings),
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> RecognitionLedger:
    return RecognitionLedger.from_settings(settings, db)
