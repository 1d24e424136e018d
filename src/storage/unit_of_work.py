from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker


class UnitOfWork:
    def __init__(self, database_url: str = None):
        if not database_url:
            raise ValueError("Database URL is required")

        url = make_url(database_url)
        if url.get_backend_name() == 'sqlite':
            # sessions are handed across threads by the API and the collector pool
            engine_options = {'connect_args': {'check_same_thread': False}}
        else:
            engine_options = {
                'pool_size': 10,
                'max_overflow': 10,
                'pool_pre_ping': True,
                'pool_recycle': 1800,
            }

        self.engine = create_engine(database_url, future=True, **engine_options)
        self.session_factory = sessionmaker(
            bind=self.engine,
            expire_on_commit=False
        )

    @contextmanager
    def session_scope(self):
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_session(self):
        return self.session_factory()

    def dispose(self):
        self.engine.dispose()

    def create_tables(self):
        from src.storage.models.models import Base
        Base.metadata.create_all(self.engine)
