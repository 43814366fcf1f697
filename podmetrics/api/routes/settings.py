from typing import Any

from fastapi import APIRouter, HTTPException

from podmetrics.models.api import SettingsUpdate
from podmetrics.utils.errors import SettingsValidationError

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/")
async def get_runtime_settings() -> dict[str, Any]:
    from podmetrics.db.pool import get_pool
    from podmetrics.services.settings_provider import SettingsProvider

    pool = await get_pool()
    return await SettingsProvider(pool).get_all()


@router.put("/")
async def update_runtime_settings(input_data: SettingsUpdate) -> dict[str, Any]:
    from podmetrics.db.pool import get_pool
    from podmetrics.services.settings_provider import SettingsProvider

    pool = await get_pool()
    try:
        return await SettingsProvider(pool).update(input_data.model_dump(exclude_none=True))
    except SettingsValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors) from e
