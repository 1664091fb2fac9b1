"""Settings router - Admin endpoints for shop configuration"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...authorization import CAP_MANAGE_SETTINGS, require_capability
from ...database import get_db
from ...models import User
from .schemas import SettingsSaveResponse, SettingsUpdate
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/settings", tags=["Settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db)


@router.get("")
async def get_settings(
    _: User = Depends(require_capability(CAP_MANAGE_SETTINGS)),
    service: SettingsService = Depends(get_settings_service),
) -> dict[str, str]:
    """Get all settings as a key/value map, defaults filled in"""
    return service.get_settings()


@router.post("", response_model=SettingsSaveResponse)
async def save_settings(
    data: SettingsUpdate,
    current_user: User = Depends(require_capability(CAP_MANAGE_SETTINGS)),
    service: SettingsService = Depends(get_settings_service),
):
    """Create or update every known setting"""
    count = service.save_settings(data)
    logger.info(f"Settings updated by user {current_user.id}")
    return SettingsSaveResponse(message="Settings saved", count=count)
