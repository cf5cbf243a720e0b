"""
Base service class providing common functionality for all services
"""
from contextlib import contextmanager

from roots_app.database import db
from roots_app.shared.logging_config import get_project_logger


class BaseService:
    """Base class for all services providing common functionality"""

    def __init__(self, db_session=None):
        self.logger = get_project_logger(self.__class__.__module__)
        self.db_session = db_session or db.session

    @contextmanager
    def transaction(self):
        """Commit everything written inside the block, or nothing"""
        try:
            yield
            self.db_session.commit()
        except Exception:
            self.db_session.rollback()
            raise
