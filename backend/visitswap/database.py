"""Ledger store: database engine lifecycle and transaction scopes."""
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from visitswap.utils.logger import logger

Base = declarative_base()


class LedgerStore:
    """
    Durable storage for users, sites, visit logs and credit logs.

    The store is opened once at process start and closed at shutdown, and is
    handed to every service explicitly. All writes go through
    ``transaction()``, which commits on normal exit and rolls back on any
    exception, so no caller can leak a partial effect.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def _build_engine(self) -> Engine:
        url = self.database_url

        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": 30}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # A single shared connection keeps the in-memory database alive
                return create_engine(
                    url,
                    connect_args=connect_args,
                    poolclass=StaticPool,
                    echo=self.echo,
                )
            return create_engine(url, connect_args=connect_args, echo=self.echo)

        # Supabase pooler (port 6543) does its own pooling
        if "pooler.supabase.com" in url or url.endswith(":6543"):
            return create_engine(url, poolclass=NullPool, echo=self.echo)

        return create_engine(
            url,
            pool_size=20,
            max_overflow=10,
            pool_pre_ping=True,
            echo=self.echo,
        )

    def open(self) -> "LedgerStore":
        """Create the engine and session factory."""
        if self.engine is None:
            self.engine = self._build_engine()
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
            logger.info(f"Ledger store opened ({self.engine.dialect.name})")
        return self

    def close(self) -> None:
        """Dispose of all pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Ledger store closed")
        self.engine = None
        self._session_factory = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def create_all(self) -> None:
        """Create all tables (development and tests; production uses migrations)."""
        # Register every model on Base.metadata
        import visitswap.models  # noqa: F401

        Base.metadata.create_all(bind=self._require_engine())

    def drop_all(self) -> None:
        import visitswap.models  # noqa: F401

        Base.metadata.drop_all(bind=self._require_engine())

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("Ledger store is not open")
        return self.engine

    def _new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Ledger store is not open")
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Read-only session scope; closing it discards anything left pending."""
        db = self._new_session()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        All-or-nothing unit of work.

        Yields:
            Session whose changes are committed when the block exits normally

        Raises:
            Whatever the block raised, after the transaction was rolled back
        """
        db = self._new_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def get_store(request: Request) -> LedgerStore:
    """Dependency returning the store opened by the application lifespan."""
    return request.app.state.store
