"""
SQLAlchemy database models and session management for the booking service.
"""
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, Optional
from loguru import logger

from sqlalchemy import (
    create_engine,
    text,
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Enum,
    Index,
    JSON,
)
from sqlalchemy.orm import declarative_base, Session, sessionmaker
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, DisconnectionError
from sqlalchemy.pool import StaticPool
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import get_settings

# Create declarative base
Base = declarative_base()

# Database engine and session factory (initialized by init_db)
engine: Engine | None = None
SessionLocal: sessionmaker | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_booking_id() -> str:
    return str(uuid.uuid4())


class Booking(Base):
    """
    Booking model representing a customer's table reservation.

    ``booking_date`` is the absolute (UTC) booking moment; ``booking_time``
    is the local clock time shown to people, e.g. "6:00 PM".
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(String(36), nullable=False, unique=True, default=new_booking_id)
    customer_name = Column(String(255), nullable=False)
    number_of_guests = Column(Integer, nullable=False)
    booking_date = Column(DateTime(timezone=True), nullable=False)
    booking_time = Column(String(16), nullable=False)
    cuisine_preference = Column(String(255), nullable=True)
    special_requests = Column(Text, nullable=True)
    weather_info = Column(JSON, nullable=True)
    seating_preference = Column(String(16), nullable=False, default="outdoor")
    status = Column(
        Enum("confirmed", "cancelled", name="booking_status"),
        nullable=False,
        default="confirmed",
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        # Listing is newest first
        Index("ix_booking_created_at", "created_at"),
        Index("ix_booking_date", "booking_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(booking_id={self.booking_id}, booking_date={self.booking_date}, "
            f"guests={self.number_of_guests}, customer_name='{self.customer_name}', "
            f"seating='{self.seating_preference}', status='{self.status}')>"
        )


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine with settings suitable for the URL's backend.

    SQLite connections are shared across threads; in-memory SQLite uses a
    single static connection so every session sees the same database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,  # Enable connection health checks
        pool_size=5,
        max_overflow=10,
    )


def init_db(database_url: str | None = None) -> Engine:
    """
    Initialize database engine and session factory.

    Args:
        database_url: Optional database connection string. If not provided,
                     DATABASE_URL from the settings is used.

    Returns:
        SQLAlchemy Engine instance
    """
    global engine, SessionLocal

    if database_url is None:
        database_url = get_settings().database_url

    engine = create_db_engine(database_url)

    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )

    return engine


def create_tables() -> None:
    """
    Create all tables in the database.

    Raises:
        RuntimeError: If database engine is not initialized
    """
    if engine is None:
        raise RuntimeError("Database engine not initialized. Call init_db() first.")

    Base.metadata.create_all(bind=engine)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic cleanup.

    Yields:
        SQLAlchemy Session instance

    Example:
        with get_db_session() as session:
            booking = session.query(Booking).first()

    Raises:
        RuntimeError: If session factory is not initialized
    """
    if SessionLocal is None:
        raise RuntimeError("Session factory not initialized. Call init_db() first.")

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function for getting database sessions (used by FastAPI).

    Yields:
        SQLAlchemy Session instance
    """
    with get_db_session() as session:
        yield session


@retry(
    retry=retry_if_exception_type((OperationalError, DisconnectionError)),
    stop=stop_after_attempt(4),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)
def init_db_with_retry(database_url: Optional[str] = None) -> Engine:
    """
    Initialize the database and verify the connection, retrying while the
    server is not reachable yet.

    Args:
        database_url: Optional database connection string

    Returns:
        SQLAlchemy Engine instance

    Raises:
        OperationalError: If the database is still unreachable after retries
    """
    db_engine = init_db(database_url)

    with db_engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    create_tables()
    logger.info(f"Database initialized: {db_engine.url.render_as_string(hide_password=True)}")
    return db_engine
