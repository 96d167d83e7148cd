"""Database connection and session management."""
from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool
from app.config import settings

# JSON columns are stored as JSONB on PostgreSQL and plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def build_engine(database_url: str, environment: str):
    """Create the SQLAlchemy engine for the configured database."""
    echo = environment == "development"

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    # Pooler connections (Supabase pooler, pgbouncer) manage their own pool
    if "pooler.supabase.com" in database_url or database_url.endswith(":6543"):
        return create_engine(database_url, poolclass=NullPool, echo=echo)

    # Direct connection for stationary servers
    return create_engine(
        database_url,
        pool_size=20,
        max_overflow=10,
        pool_pre_ping=True,
        echo=echo,
    )


engine = build_engine(settings.database_url, settings.environment)

SessionLocal = sessionmaker(autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
