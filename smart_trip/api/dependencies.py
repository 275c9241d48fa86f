from smart_trip.api.auth import email_from_authorization
from smart_trip.api.service import TravelServices
from smart_trip.core.config import ApiSettings
from fastapi import Depends, FastAPI, Header
from sqlalchemy.orm import Session
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Iterator, Optional
from functools import lru_cache


@lru_cache(maxsize=1)
def get_services() -> TravelServices:
    settings = ApiSettings.from_env()
    return TravelServices(settings)


def get_session(services: TravelServices = Depends(get_services)) -> Iterator[Session]:
    with services.session_factory() as session:
        yield session


def get_current_email(
    authorization: Optional[str] = Header(default=None),
    services: TravelServices = Depends(get_services),
) -> str:
    return email_from_authorization(
        authorization,
        secret=services.settings.auth_secret,
        algorithm=services.settings.auth_algorithm,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if get_services.cache_info().currsize:
            await get_services().close()
            get_services.cache_clear()
