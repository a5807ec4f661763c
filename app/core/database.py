import logging
import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.core.config import settings

logger = logging.getLogger(__name__)

# Positional placeholders emitted by the SQL compilers: $1, $2, ...
_PLACEHOLDER = re.compile(r"\$(\d+)")

_engine_kwargs = {"pool_pre_ping": True, "echo": settings.SQLALCHEMY_ECHO}
if settings.DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs.update(pool_size=10, max_overflow=20)

# Create SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, **_engine_kwargs)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def bind_positional(sql: str, values: Sequence[Any]):
    """
    Translate ``$n`` placeholders into SQLAlchemy named binds.

    Returns the rewritten statement and the bind dict. Every placeholder must
    refer to an existing position in ``values``.
    """
    def _rename(match):
        index = int(match.group(1))
        if index < 1 or index > len(values):
            raise ValueError(f"Placeholder ${index} has no matching value ({len(values)} supplied)")
        return f":p{index}"

    statement = _PLACEHOLDER.sub(_rename, sql)
    params = {f"p{i}": value for i, value in enumerate(values, start=1)}
    return statement, params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a ``$n``-parameterized statement on the request session.

    The caller owns the transaction: reads need nothing more, writes call
    ``db.commit()`` once the rows they need have been fetched.
    """
    statement, params = bind_positional(sql, values)
    logger.debug("Executing SQL: %s", statement)
    return db.execute(text(statement), params)


def init_db():
    """
    Initialize database.

    Imports the models so their tables are registered on Base.metadata, then
    creates any table that does not exist yet.
    """
    from app.models import company, job, user, application  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=engine)
