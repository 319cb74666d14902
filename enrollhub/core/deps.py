"""Centralized dependency type aliases for FastAPI routes.

Infrastructure dependencies live here; authentication dependencies are in
``enrollhub.auth.dependencies``:
    from enrollhub.core.deps import SessionDep, SettingsDep, MailerDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from enrollhub.auth.tokens import TokenIssuer
from enrollhub.core.email import Mailer, get_mailer
from enrollhub.core.images import ImageStore, get_image_store
from enrollhub.core.settings import Settings, get_settings
from enrollhub.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Outbound collaborators
MailerDep = Annotated[Mailer, Depends(get_mailer)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]


def get_token_issuer(settings: SettingsDep) -> TokenIssuer:
    """Token issuer bound to the current settings' secrets and lifetimes."""
    return TokenIssuer(settings.token_config)


TokenIssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]
