from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.db.base  # noqa: E402, F401
from app.auth.services.email_service import (  # noqa: E402
    EmailMessage,
    EmailService,
    get_email_service,
)
from app.core.exceptions import ExternalServiceError  # noqa: E402
from app.db.session import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from tests.utils.factories import create_user_factory  # noqa: E402
from tests.utils.helpers import create_token_for  # noqa: E402


class RecordingEmailService(EmailService):
    """Keeps sent messages in memory; set ``fail`` to simulate a transport outage."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send_email(self, message: EmailMessage) -> None:
        if self.fail:
            raise ExternalServiceError("Failed to send email", service="smtp")
        self.sent.append(message)


@pytest.fixture
def test_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    session = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def email_outbox():
    return RecordingEmailService()


@pytest.fixture
async def test_app(db_session, email_outbox):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_outbox

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def test_user(db_session):
    return create_user_factory(db_session, email="user@example.com", password="testpass123")


@pytest.fixture
def test_admin(db_session):
    return create_user_factory(
        db_session, email="admin@example.com", password="adminpass123", role="admin"
    )


@pytest.fixture
def test_user_token(test_user):
    return create_token_for(test_user)


@pytest.fixture
def test_admin_token(test_admin):
    return create_token_for(test_admin)
