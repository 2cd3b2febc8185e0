import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Return
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.completion_service import Completion, ICompletionService
from src.depends import get_completion_service, get_unit_of_work


class StubCompletionService(ICompletionService):
    """Records calls and replays a configurable upstream outcome"""

    def __init__(self):
        self.result = Return.ok(Completion(content="Stub reply", tokens_consumed=0))
        self.calls = []

    async def complete(self, transcript, model_name):
        self.calls.append((transcript, model_name))
        return self.result


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def completion_stub():
    return StubCompletionService()


@pytest_asyncio.fixture
async def client(db_session, completion_stub):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_completion_service] = lambda: completion_stub

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
