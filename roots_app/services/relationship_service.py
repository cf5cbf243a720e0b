"""
Service for relationship edges between Individuals
"""

from roots_app.database.models import Individual, MarriedTo, ParentOf, SiblingTo
from roots_app.repositories.genealogy_repository import IndividualRepository
from roots_app.repositories.relationship_repository import (
    MarriageRepository,
    ParentOfRepository,
    SiblingRepository,
)
from roots_app.services.base_service import BaseService
from roots_app.services.exceptions import (
    ConflictError,
    MissingReferenceError,
    NotFoundError,
    SelfReferenceError,
    ValidationError,
    handle_service_exceptions,
)
from roots_app.shared.logging_config import get_project_logger
from roots_app.shared.validators import check_interval, check_text_fields, parse_date, parse_id


logger = get_project_logger(__name__)

MARRIAGE_TEXT_LIMITS = {'reason_for_end': 256}


class RelationshipService(BaseService):
    """Parent/child, marriage and sibling edges"""

    def __init__(self, db_session=None):
        super().__init__(db_session)
        self.individuals = IndividualRepository(self.db_session)
        self.parent_links = ParentOfRepository(self.db_session)
        self.marriages = MarriageRepository(self.db_session)
        self.sibling_links = SiblingRepository(self.db_session)

    # Parent/child

    @handle_service_exceptions(logger)
    def add_parent(self, parent_id, child_id) -> ParentOf:
        parent_id = self._require_individual(parent_id, 'parent_id')
        child_id = self._require_individual(child_id, 'child_id')
        if parent_id == child_id:
            raise SelfReferenceError(f"Individual {parent_id} cannot be their own parent")
        if self.parent_links.find_edge(parent_id, child_id) is not None:
            raise ConflictError(f"Individual {parent_id} is already a parent of {child_id}")

        with self.transaction():
            edge = self.parent_links.create(parent_id=parent_id, child_id=child_id)
        logger.info(f"Linked parent {parent_id} -> child {child_id}")
        return edge

    @handle_service_exceptions(logger)
    def get_parents(self, individual_id) -> list[Individual]:
        individual_id = self._get_individual_id(individual_id)
        edges = self.parent_links.find_by(child_id=individual_id)
        return [edge.parent for edge in edges]

    @handle_service_exceptions(logger)
    def get_children(self, individual_id) -> list[Individual]:
        individual_id = self._get_individual_id(individual_id)
        edges = self.parent_links.find_by(parent_id=individual_id)
        return [edge.child for edge in edges]

    # Marriage

    @handle_service_exceptions(logger)
    def add_marriage(self, spouse_1_id, spouse_2_id, marriage_date,
                     marriage_end_date=None, reason_for_end: str | None = None) -> MarriedTo:
        """
        Record a marriage

        Args:
            spouse_1_id: First spouse, required
            spouse_2_id: Second spouse, None when unknown
            marriage_date: Date of the marriage, required
            marriage_end_date: Date the marriage ended, if it did
            reason_for_end: death, divorce, annulment, ...

        Returns:
            The new MarriedTo row
        """
        spouse_1_id = self._require_individual(spouse_1_id, 'spouse_1_id')
        if spouse_2_id is not None:
            spouse_2_id = self._require_individual(spouse_2_id, 'spouse_2_id')
        if spouse_1_id == spouse_2_id:
            raise SelfReferenceError(f"Individual {spouse_1_id} cannot marry themselves")

        start = parse_date(marriage_date, 'marriage_date')
        if start is None:
            raise ValidationError("Missing required fields: marriage_date")
        end = parse_date(marriage_end_date, 'marriage_end_date')
        check_interval(start, end, 'marriage_date', 'marriage_end_date')
        check_text_fields({'reason_for_end': reason_for_end}, MARRIAGE_TEXT_LIMITS)
        if reason_for_end and end is None:
            raise ValidationError("reason_for_end requires marriage_end_date")

        with self.transaction():
            marriage = self.marriages.create(
                spouse_1_id=spouse_1_id,
                spouse_2_id=spouse_2_id,
                marriage_date=start,
                marriage_end_date=end,
                reason_for_end=reason_for_end,
            )
        logger.info(f"Recorded marriage {marriage.id} between {spouse_1_id} and {spouse_2_id}")
        return marriage

    @handle_service_exceptions(logger)
    def end_marriage(self, marriage_id, end_date, reason: str | None = None) -> MarriedTo:
        marriage = self.marriages.get_by_id(parse_id(marriage_id, 'marriage_id'))
        if marriage is None:
            raise NotFoundError(f"Marriage {marriage_id} not found")
        if marriage.marriage_end_date is not None:
            raise ConflictError(f"Marriage {marriage.id} already ended on {marriage.marriage_end_date.isoformat()}")

        end = parse_date(end_date, 'marriage_end_date')
        if end is None:
            raise ValidationError("Missing required fields: marriage_end_date")
        check_interval(marriage.marriage_date, end, 'marriage_date', 'marriage_end_date')
        check_text_fields({'reason_for_end': reason}, MARRIAGE_TEXT_LIMITS)

        with self.transaction():
            self.marriages.update(marriage, marriage_end_date=end, reason_for_end=reason)
        logger.info(f"Marriage {marriage.id} ended on {end.isoformat()} ({reason or 'no reason given'})")
        return marriage

    @handle_service_exceptions(logger)
    def get_marriages(self, individual_id) -> list[MarriedTo]:
        individual_id = self._get_individual_id(individual_id)
        return self.marriages.marriages_of(individual_id)

    # Siblings

    @handle_service_exceptions(logger)
    def add_sibling(self, sibling_1_id, sibling_2_id) -> SiblingTo:
        sibling_1_id = self._require_individual(sibling_1_id, 'sibling_1_id')
        sibling_2_id = self._require_individual(sibling_2_id, 'sibling_2_id')
        if sibling_1_id == sibling_2_id:
            raise SelfReferenceError(f"Individual {sibling_1_id} cannot be their own sibling")
        if self.sibling_links.find_pair(sibling_1_id, sibling_2_id) is not None:
            raise ConflictError(f"Individuals {sibling_1_id} and {sibling_2_id} are already siblings")

        with self.transaction():
            edge = self.sibling_links.create(sibling_1_id=sibling_1_id, sibling_2_id=sibling_2_id)
        logger.info(f"Linked siblings {sibling_1_id} and {sibling_2_id}")
        return edge

    @handle_service_exceptions(logger)
    def get_siblings(self, individual_id) -> list[Individual]:
        """Siblings of an Individual, whichever side of the edge they were stored on"""
        individual_id = self._get_individual_id(individual_id)
        edges = self.sibling_links.edges_of(individual_id)
        sibling_ids = [edge.sibling_of(individual_id) for edge in edges]
        return [self.individuals.get_by_id(sibling_id) for sibling_id in sibling_ids]

    # Helpers

    def _require_individual(self, individual_id, field: str) -> int:
        parsed = parse_id(individual_id, field)
        if parsed is None:
            raise ValidationError(f"Missing required fields: {field}")
        if not self.individuals.exists(parsed):
            raise MissingReferenceError(f"{field} references unknown individual {individual_id}")
        return parsed

    def _get_individual_id(self, individual_id) -> int:
        parsed = parse_id(individual_id, 'individual_id')
        if parsed is None or not self.individuals.exists(parsed):
            raise NotFoundError(f"Individual {individual_id} not found")
        return parsed
