"""Settings API - read and edit the shared configuration record."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from pipeline_console.api.dependencies import get_configuration_store, limiter, rate_limit
from pipeline_console.application.console.dto import FieldUpdate, SettingsResponse
from pipeline_console.domain.entities.configuration import (
    FIELD_DESCRIPTORS,
    ConfigurationStore,
    UnknownFieldError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _settings(store: ConfigurationStore) -> SettingsResponse:
    return SettingsResponse(
        values=store.get().model_dump(),
        fields=list(FIELD_DESCRIPTORS),
    )


@router.get("", response_model=SettingsResponse)
async def get_settings(
    store: ConfigurationStore = Depends(get_configuration_store),
) -> SettingsResponse:
    """Return the configuration record with field labels and options."""
    return _settings(store)


@router.put("/{field}", response_model=SettingsResponse)
@limiter.limit(rate_limit)
async def set_field(
    request: Request,
    field: str,
    update: FieldUpdate,
    store: ConfigurationStore = Depends(get_configuration_store),
) -> SettingsResponse:
    """Replace one field; every other field stays as it is."""
    try:
        store.set(field, update.value)
    except UnknownFieldError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    logger.debug("Setting %s updated", field)
    return _settings(store)


@router.post("/reset", response_model=SettingsResponse)
@limiter.limit(rate_limit)
async def reset_settings(
    request: Request,
    store: ConfigurationStore = Depends(get_configuration_store),
) -> SettingsResponse:
    """Restore every field to its configured default."""
    store.reset()
    logger.info("Settings reset to defaults")
    return _settings(store)
