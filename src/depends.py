from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.ai_gateway_client import AIGatewayCompletionService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import user_id_from_payload, verify_jwt
from src.app.services.completion_service import ICompletionService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False so a missing header is a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_completion_service() -> ICompletionService:
    return AIGatewayCompletionService(
        url=ApplicationConfig.AI_GATEWAY_URL,
        api_key=ApplicationConfig.AI_GATEWAY_API_KEY,
        system_prompt=ApplicationConfig.SYSTEM_PROMPT,
        timeout=ApplicationConfig.AI_GATEWAY_TIMEOUT_SECONDS,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UUID:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Caller's user ID

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    payload = verify_jwt(credentials.credentials) if credentials else None
    user_id = user_id_from_payload(payload) if payload else None

    if user_id is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return user_id
