"""
Repositories for the edge tables between Individuals
"""

from roots_app.database import db
from roots_app.database.models import MarriedTo, ParentOf, SiblingTo
from roots_app.repositories.base_repository import ModelRepository


class ParentOfRepository(ModelRepository[ParentOf]):
    """Repository for parent/child edges"""

    model_class = ParentOf

    def find_edge(self, parent_id: int, child_id: int) -> ParentOf | None:
        def _find_edge():
            return self.db_session.execute(
                db.select(ParentOf).filter_by(parent_id=parent_id, child_id=child_id)
            ).scalars().first()

        return self.safe_query(_find_edge, f"find parent edge {parent_id}->{child_id}")


class MarriageRepository(ModelRepository[MarriedTo]):
    """Repository for marriages"""

    model_class = MarriedTo

    def marriages_of(self, individual_id: int) -> list[MarriedTo]:
        """Every marriage the Individual took part in, in date order"""
        def _marriages_of():
            return self.db_session.execute(
                db.select(MarriedTo)
                .where(db.or_(
                    MarriedTo.spouse_1_id == individual_id,
                    MarriedTo.spouse_2_id == individual_id,
                ))
                .order_by(MarriedTo.marriage_date, MarriedTo.id)
            ).scalars().all()

        return self.safe_query(_marriages_of, f"marriages of individual {individual_id}")


class SiblingRepository(ModelRepository[SiblingTo]):
    """Repository for sibling edges, stored once per pair"""

    model_class = SiblingTo

    def find_pair(self, first_id: int, second_id: int) -> SiblingTo | None:
        def _find_pair():
            return self.db_session.execute(
                db.select(SiblingTo).where(db.or_(
                    db.and_(SiblingTo.sibling_1_id == first_id, SiblingTo.sibling_2_id == second_id),
                    db.and_(SiblingTo.sibling_1_id == second_id, SiblingTo.sibling_2_id == first_id),
                ))
            ).scalars().first()

        return self.safe_query(_find_pair, f"find sibling pair {first_id}/{second_id}")

    def edges_of(self, individual_id: int) -> list[SiblingTo]:
        def _edges_of():
            return self.db_session.execute(
                db.select(SiblingTo)
                .where(db.or_(
                    SiblingTo.sibling_1_id == individual_id,
                    SiblingTo.sibling_2_id == individual_id,
                ))
                .order_by(SiblingTo.id)
            ).scalars().all()

        return self.safe_query(_edges_of, f"sibling edges of individual {individual_id}")
