"""Shared request dependencies."""

from typing import Annotated

from fastapi import Depends, Path, Request

from perfeval.config import Settings
from perfeval.database import SQLITE_MAX_INT, SQLITE_MIN_INT


def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]

# Row id path parameter, bounded to what the database can store
RowId = Annotated[int, Path(ge=SQLITE_MIN_INT, le=SQLITE_MAX_INT)]
