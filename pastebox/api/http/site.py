from fastapi import APIRouter, Depends

from pastebox.core.config import Settings, get_settings
from pastebox.core.schemas import CamelModel

router = APIRouter(prefix="/api", tags=["site"])


class SiteConfigResponse(CamelModel):
    base_url: str


@router.get("/config", response_model=SiteConfigResponse)
async def get_site_config(settings: Settings = Depends(get_settings)):
    """Публичные настройки для клиента"""
    return SiteConfigResponse(base_url=settings.app_base_url)
