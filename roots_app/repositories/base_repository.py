"""
Repository base for the genealogy tables

Repositories flush and never commit; the calling service owns the transaction.
Nothing is deleted: genealogical records are historical.
"""

from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError

from roots_app.database import db
from roots_app.shared.logging_config import get_project_logger

ModelType = TypeVar('ModelType')


class ModelRepository(Generic[ModelType]):
    """
    Create, read and update rows of one mapped model

    Subclasses set ``model_class`` and add the queries their service needs.
    Rows come back ordered by primary key so listings are stable across backends.
    """

    model_class: type[ModelType]

    def __init__(self, db_session=None):
        self.db_session = db_session or db.session
        self.logger = get_project_logger(self.__class__.__name__)

    @property
    def model_name(self) -> str:
        return self.model_class.__name__

    def safe_operation(self, operation: Callable[[], Any], operation_name: str = "write") -> Any:
        """
        Run a write, then flush so constraint violations surface here

        Any failure rolls the session back before the original exception is re-raised.
        """
        try:
            result = operation()
            self.db_session.flush()
        except SQLAlchemyError as e:
            self.db_session.rollback()
            self.logger.error(f"Database error in {operation_name}: {e}")
            raise
        except Exception as e:
            self.db_session.rollback()
            self.logger.error(f"{operation_name} failed: {e}")
            raise
        self.logger.debug(f"{operation_name} flushed")
        return result

    def safe_query(self, query_func: Callable[[], Any], operation_name: str = "query") -> Any:
        """Run a read; the session is left untouched on failure"""
        try:
            return query_func()
        except SQLAlchemyError as e:
            self.logger.error(f"Database error in {operation_name}: {e}")
            raise

    def _ordered(self, statement):
        return statement.order_by(*self.model_class.__table__.primary_key.columns)

    def _column_names(self) -> set[str]:
        return set(sa_inspect(self.model_class).column_attrs.keys())

    def create(self, **values) -> ModelType:
        def _create():
            instance = self.model_class(**values)
            self.db_session.add(instance)
            return instance

        return self.safe_operation(_create, f"create {self.model_name}")

    def update(self, instance: ModelType, **values) -> ModelType:
        """Set mapped columns on instance; other keys are skipped"""
        columns = self._column_names()
        skipped = sorted(set(values) - columns)
        if skipped:
            self.logger.debug(f"update {self.model_name} skipped non-column keys {skipped}")

        def _update():
            for key in columns.intersection(values):
                setattr(instance, key, values[key])
            return instance

        return self.safe_operation(_update, f"update {self.model_name}")

    def get_by_id(self, id_value: Any) -> ModelType | None:
        return self.safe_query(
            lambda: self.db_session.get(self.model_class, id_value),
            f"get {self.model_name} {id_value!r}",
        )

    def exists(self, id_value: Any) -> bool:
        return self.get_by_id(id_value) is not None

    def get_all(self) -> list[ModelType]:
        return self.safe_query(
            lambda: self.db_session.execute(self._ordered(db.select(self.model_class))).scalars().all(),
            f"list {self.model_name}",
        )

    def find_by(self, **filters) -> list[ModelType]:
        """Rows whose columns equal the given values"""
        return self.safe_query(
            lambda: self.db_session.execute(
                self._ordered(db.select(self.model_class).filter_by(**filters))
            ).scalars().all(),
            f"find {self.model_name} by {sorted(filters)}",
        )

    def count(self) -> int:
        return self.safe_query(
            lambda: self.db_session.execute(
                db.select(db.func.count()).select_from(self.model_class)
            ).scalar_one(),
            f"count {self.model_name}",
        )
