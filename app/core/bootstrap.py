import logging

from app.api.v1.routers import customers
from app.core.config import settings
from app.core.routers import cep

logger = logging.getLogger(__name__)


def bootstrap_app(app):
    prefix = settings.API_V1_STR

    app.include_router(customers.router, prefix=prefix, tags=["Clientes"])
    app.include_router(cep.router, prefix=prefix, tags=["CEP"])
    logger.info(f"Routers registered under {prefix}.")
