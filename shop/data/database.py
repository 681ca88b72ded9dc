# shop/data/database.py
from collections.abc import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shop.utils.settings import DATABASE_URL
from shop.utils.logging import get_logger

logger = get_logger(__name__)


Base = declarative_base()


class Database:
    """
    Silnik + fabryka sesji.
    Jedna instancja na proces, tworzona w create_app i zamykana przy shutdown.
    """

    def __init__(self, url: str | None = None, echo: bool = False):
        self.url = url or DATABASE_URL
        kwargs = {"echo": echo}

        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url == "sqlite://":
                # jedna wspolna baza w pamieci dla wszystkich sesji
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **kwargs)

        if self.url.startswith("sqlite"):
            event.listen(self.engine, "connect", _sqlite_pragmas)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_all(self) -> None:
        # rejestracja wszystkich modeli w Base.metadata
        import shop.data.models  # noqa: F401

        logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def sessions(self) -> Iterator[Session]:
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def _sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
