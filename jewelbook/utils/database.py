import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from jewelbook.core.config import DATABASE_URL, DB_ECHO
from jewelbook.core.errors import ConflictError, LedgerError, StorageUnavailable

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL, **kwargs):
    """
    SQLite for local/dev runs, PostgreSQL (psycopg2) in production.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, echo=DB_ECHO, future=True, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_fk(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        echo=DB_ECHO,
        pool_pre_ping=True,  # drops dead connections automatically
        pool_size=5,
        max_overflow=10,
        future=True,
        **kwargs,
    )


# ---------------------
# SQLAlchemy engine / session / Base
# ---------------------
engine = build_engine()

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------------------
# Unit of work
# ---------------------
@contextmanager
def atomic(db: Session):
    """
    Everything written inside the block is committed as one unit,
    or rolled back entirely if anything raises.

    Raw SQLAlchemy errors are translated to the ledger error taxonomy
    so they never leak past the service layer.
    """
    try:
        yield db
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        msg = str(getattr(e, "orig", None) or e)
        logger.warning("Integrity violation, unit rolled back: %s", msg)
        raise ConflictError("Conflicting write, please retry") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error, unit rolled back")
        raise StorageUnavailable("Database unavailable") from e
    except Exception:
        db.rollback()
        raise


def apply_together(db: Session, write_a, write_b):
    """
    Run two writes against the same session and commit them together.
    Returns whatever write_a returned.
    """
    with atomic(db):
        result = write_a()
        write_b()
    return result
