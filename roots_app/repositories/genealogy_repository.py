"""
Repositories for Individuals and the records they own
"""

from roots_app.database import db
from roots_app.database.models import (
    FormerCountry,
    Image,
    Individual,
    MarriedTo,
    Name,
    Occupation,
    ParentOf,
    SiblingTo,
    User,
)
from roots_app.repositories.base_repository import ModelRepository


class IndividualRepository(ModelRepository[Individual]):
    """Repository for Individual profiles"""

    model_class = Individual

    def list_individuals(self, include_private: bool = True) -> list[Individual]:
        def _list():
            query = db.select(Individual).order_by(Individual.id)
            if not include_private:
                query = query.where(db.or_(Individual.private.is_(None), Individual.private == db.false()))
            return self.db_session.execute(query).scalars().all()

        return self.safe_query(_list, "list individuals")


class NameRepository(ModelRepository[Name]):
    """Repository for names held by Individuals"""

    model_class = Name

    def open_names(self, individual_id: int, exclude_id: int | None = None) -> list[Name]:
        """Names of an Individual with no end date"""
        def _open_names():
            query = db.select(Name).where(
                Name.individual_id == individual_id,
                Name.date_to.is_(None),
            )
            if exclude_id is not None:
                query = query.where(Name.id != exclude_id)
            return self.db_session.execute(query).scalars().all()

        return self.safe_query(_open_names, f"open names of individual {individual_id}")

    def names_for(self, individual_id: int) -> list[Name]:
        def _names_for():
            return self.db_session.execute(
                db.select(Name)
                .where(Name.individual_id == individual_id)
                .order_by(Name.date_from.is_(None), Name.date_from, Name.id)
            ).scalars().all()

        return self.safe_query(_names_for, f"names of individual {individual_id}")


class ImageRepository(ModelRepository[Image]):
    model_class = Image


class OccupationRepository(ModelRepository[Occupation]):
    model_class = Occupation


class GenealogyDataRepository(IndividualRepository):
    """Whole-database queries over the genealogy tables"""

    def get_database_stats(self) -> dict[str, int]:
        """Get database statistics"""
        tables = {
            'total_individuals': Individual,
            'total_names': Name,
            'total_images': Image,
            'total_occupations': Occupation,
            'total_parent_links': ParentOf,
            'total_marriages': MarriedTo,
            'total_sibling_links': SiblingTo,
            'total_users': User,
            'total_former_countries': FormerCountry,
        }

        def _get_stats():
            return {
                key: self.db_session.execute(
                    db.select(db.func.count()).select_from(model)
                ).scalar_one()
                for key, model in tables.items()
            }

        return self.safe_query(_get_stats, "get database stats")
