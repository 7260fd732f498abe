from typing import Optional

from fastapi import Header, HTTPException, status

from app.core.config import settings


def verify_api_key(x_api_key: Optional[str] = Header(None)):
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="API Key Inválida!")
