"""
Repositories for user accounts and the former-country lookup table
"""

from datetime import date

from roots_app.database import db
from roots_app.database.models import FormerCountry, User
from roots_app.repositories.base_repository import ModelRepository


class UserRepository(ModelRepository[User]):
    """Repository for administrative accounts, keyed by email"""

    model_class = User

    def get_by_email(self, email: str) -> User | None:
        return self.get_by_id(email)


class FormerCountryRepository(ModelRepository[FormerCountry]):
    """Repository for the former-country lookup table"""

    model_class = FormerCountry

    def list_countries(self) -> list[FormerCountry]:
        def _list():
            return self.db_session.execute(
                db.select(FormerCountry).order_by(FormerCountry.name, FormerCountry.date_from)
            ).scalars().all()

        return self.safe_query(_list, "list former countries")

    def find_entry(self, name: str, date_from: date, date_to: date) -> FormerCountry | None:
        def _find_entry():
            return self.db_session.execute(
                db.select(FormerCountry).filter_by(name=name, date_from=date_from, date_to=date_to)
            ).scalars().first()

        return self.safe_query(_find_entry, f"find former country {name}")
