from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.core.config import settings
from app.core.middlewares import limiter
from app.core.schemas import ApiResponse
from app.core.security import verify_api_key
from app.core.services import ViaCepService, get_viacep_service

prefix = "/cep"
router = APIRouter(prefix=prefix, dependencies=[Depends(verify_api_key)])


@router.get("/{cep}", response_model=ApiResponse)
@limiter.limit(settings.CEP_RATE_LIMIT)
async def get_cep_address(
        request: Request,
        cep: str,
        resolver: Annotated[ViaCepService, Depends(get_viacep_service)]
):
    """Look a CEP up on ViaCEP without storing it."""
    address = await resolver.resolve(cep)
    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=address
    )
