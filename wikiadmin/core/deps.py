"""Core dependency type aliases for FastAPI routes.

Domain-specific dependencies (current user, repositories, config manager)
live next to the code they build, e.g. ``wikiadmin.auth.dependencies``.
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from wikiadmin.core.settings import Settings, get_settings
from wikiadmin.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
