"""
Service for Individuals and the records they own: names, images, occupations
"""

from roots_app.database.models import Image, Individual, Name, Occupation
from roots_app.repositories.genealogy_repository import (
    GenealogyDataRepository,
    ImageRepository,
    IndividualRepository,
    NameRepository,
    OccupationRepository,
)
from roots_app.services.base_service import BaseService
from roots_app.services.exceptions import (
    DuplicateCurrentNameError,
    MissingReferenceError,
    NotFoundError,
    ValidationError,
    handle_service_exceptions,
)
from roots_app.shared.logging_config import get_project_logger
from roots_app.shared.validators import (
    check_boolean,
    check_interval,
    check_text_fields,
    parse_date,
    parse_dates,
    parse_id,
    reject_unknown_fields,
    require_fields,
)


logger = get_project_logger(__name__)

INDIVIDUAL_FIELDS = (
    'date_of_birth', 'municipality_of_birth', 'state_of_birth', 'country_of_birth',
    'date_of_death', 'municipality_of_death', 'state_of_death', 'country_of_death',
    'gender', 'bio', 'image', 'private',
)
# A profile image must already belong to the Individual, so it can only be set by an update
INDIVIDUAL_CREATE_FIELDS = tuple(field for field in INDIVIDUAL_FIELDS if field != 'image')
INDIVIDUAL_DATE_FIELDS = ('date_of_birth', 'date_of_death')
INDIVIDUAL_TEXT_LIMITS = {
    'municipality_of_birth': 128, 'state_of_birth': 64, 'country_of_birth': 64,
    'municipality_of_death': 128, 'state_of_death': 64, 'country_of_death': 64,
    'gender': 64, 'bio': 5000,
}

NAME_FIELDS = (
    'first_name', 'middle_name', 'last_name', 'suffix', 'reason_for_change', 'date_from', 'date_to',
)
NAME_REQUIRED_FIELDS = ('first_name', 'last_name')
NAME_TEXT_LIMITS = dict.fromkeys(('first_name', 'middle_name', 'last_name', 'suffix', 'reason_for_change'), 256)

IMAGE_FIELDS = ('url',)
IMAGE_TEXT_LIMITS = {'url': None}

OCCUPATION_FIELDS = (
    'occupation', 'occupation_start', 'occupation_end', 'employer', 'country', 'state', 'municipality',
)
OCCUPATION_TEXT_LIMITS = dict.fromkeys(('occupation', 'employer', 'country', 'state', 'municipality'), 256)


class GenealogyService(BaseService):
    """Create, read and update Individuals and their owned records"""

    def __init__(self, db_session=None):
        super().__init__(db_session)
        self.individuals = IndividualRepository(self.db_session)
        self.names = NameRepository(self.db_session)
        self.images = ImageRepository(self.db_session)
        self.occupations = OccupationRepository(self.db_session)
        self.stats_repository = GenealogyDataRepository(self.db_session)

    # Individuals

    @handle_service_exceptions(logger)
    def create_individual(self, data: dict, name: dict | None = None) -> Individual:
        """
        Create an Individual, optionally with its initial Name

        Both rows are written in one transaction; if the Name is invalid the
        Individual is not created either.
        """
        fields = self._clean_individual(data or {}, INDIVIDUAL_CREATE_FIELDS)

        with self.transaction():
            individual = self.individuals.create(**fields)
            if name is not None:
                self._create_name(individual.id, name)

        logger.info(f"Created individual {individual.id}")
        return individual

    @handle_service_exceptions(logger)
    def get_individual(self, individual_id) -> Individual:
        individual = self.individuals.get_by_id(parse_id(individual_id, 'individual_id'))
        if individual is None:
            raise NotFoundError(f"Individual {individual_id} not found")
        return individual

    @handle_service_exceptions(logger)
    def list_individuals(self, include_private: bool = True) -> list[Individual]:
        return self.individuals.list_individuals(include_private)

    @handle_service_exceptions(logger)
    def update_individual(self, individual_id, data: dict) -> Individual:
        """Update profile fields; birth/death ordering is checked on the merged record"""
        individual = self.get_individual(individual_id)
        fields = self._clean_individual(data or {}, INDIVIDUAL_FIELDS, existing=individual)
        if fields.get('image') is not None:
            self._check_profile_image(individual.id, fields['image'])

        with self.transaction():
            self.individuals.update(individual, **fields)

        logger.info(f"Updated individual {individual.id}: {sorted(fields)}")
        return individual

    # Names

    @handle_service_exceptions(logger)
    def add_name(self, individual_id, data: dict) -> Name:
        individual_id = self._require_individual(individual_id)
        with self.transaction():
            name = self._create_name(individual_id, data)
        logger.info(f"Added name {name.full_name!r} to individual {individual_id}")
        return name

    @handle_service_exceptions(logger)
    def list_names(self, individual_id) -> list[Name]:
        individual = self.get_individual(individual_id)
        return self.names.names_for(individual.id)

    @handle_service_exceptions(logger)
    def current_name(self, individual_id) -> Name | None:
        individual = self.get_individual(individual_id)
        open_names = self.names.open_names(individual.id)
        return open_names[0] if open_names else None

    @handle_service_exceptions(logger)
    def update_name(self, name_id, data: dict) -> Name:
        name = self.names.get_by_id(parse_id(name_id, 'name_id'))
        if name is None:
            raise NotFoundError(f"Name {name_id} not found")

        reject_unknown_fields(data, NAME_FIELDS)
        check_text_fields(data, NAME_TEXT_LIMITS)
        fields = parse_dates(data, ('date_from', 'date_to'))
        merged = {field: fields.get(field, getattr(name, field)) for field in NAME_FIELDS}
        require_fields(merged, NAME_REQUIRED_FIELDS)
        check_interval(merged['date_from'], merged['date_to'], 'date_from', 'date_to')
        if merged['date_to'] is None:
            self._check_no_open_name(name.individual_id, exclude_id=name.id)

        with self.transaction():
            self.names.update(name, **fields)
        return name

    @handle_service_exceptions(logger)
    def change_name(self, individual_id, data: dict, effective_date) -> Name:
        """
        Close the current name and open a new one on the same day

        Args:
            individual_id: Individual whose name changes
            data: Fields of the new name (date_from/date_to are set here)
            effective_date: Day the new name was taken

        Returns:
            The new current Name
        """
        individual_id = self._require_individual(individual_id)
        effective = parse_date(effective_date, 'effective_date')
        if effective is None:
            raise ValidationError("Missing required fields: effective_date")
        if data.get('date_from') or data.get('date_to'):
            raise ValidationError("date_from and date_to are set by the name change")

        with self.transaction():
            for current in self.names.open_names(individual_id):
                check_interval(current.date_from, effective, 'date_from', 'effective_date')
                self.names.update(current, date_to=effective)
            new_data = {**data, 'date_from': effective, 'date_to': None}
            name = self._create_name(individual_id, new_data)

        logger.info(f"Individual {individual_id} changed name to {name.full_name!r}")
        return name

    # Images

    @handle_service_exceptions(logger)
    def add_image(self, individual_id, data: dict) -> Image:
        individual_id = self._require_individual(individual_id)
        reject_unknown_fields(data, IMAGE_FIELDS)
        check_text_fields(data, IMAGE_TEXT_LIMITS)
        require_fields(data, IMAGE_FIELDS)
        with self.transaction():
            image = self.images.create(individual_id=individual_id, url=data['url'])
        return image

    @handle_service_exceptions(logger)
    def list_images(self, individual_id) -> list[Image]:
        individual = self.get_individual(individual_id)
        return self.images.find_by(individual_id=individual.id)

    @handle_service_exceptions(logger)
    def update_image(self, image_id, data: dict) -> Image:
        image = self.images.get_by_id(parse_id(image_id, 'image_id'))
        if image is None:
            raise NotFoundError(f"Image {image_id} not found")
        reject_unknown_fields(data, IMAGE_FIELDS)
        check_text_fields(data, IMAGE_TEXT_LIMITS)
        require_fields({'url': data.get('url', image.url)}, IMAGE_FIELDS)
        with self.transaction():
            self.images.update(image, **data)
        return image

    # Occupations

    @handle_service_exceptions(logger)
    def add_occupation(self, individual_id, data: dict) -> Occupation:
        individual_id = self._require_individual(individual_id)
        reject_unknown_fields(data, OCCUPATION_FIELDS)
        check_text_fields(data, OCCUPATION_TEXT_LIMITS)
        require_fields(data, ('occupation',))
        fields = parse_dates(data, ('occupation_start', 'occupation_end'))
        check_interval(fields.get('occupation_start'), fields.get('occupation_end'),
                       'occupation_start', 'occupation_end')
        with self.transaction():
            occupation = self.occupations.create(individual_id=individual_id, **fields)
        return occupation

    @handle_service_exceptions(logger)
    def list_occupations(self, individual_id) -> list[Occupation]:
        individual = self.get_individual(individual_id)
        return self.occupations.find_by(individual_id=individual.id)

    @handle_service_exceptions(logger)
    def update_occupation(self, occupation_id, data: dict) -> Occupation:
        occupation = self.occupations.get_by_id(parse_id(occupation_id, 'occupation_id'))
        if occupation is None:
            raise NotFoundError(f"Occupation {occupation_id} not found")

        reject_unknown_fields(data, OCCUPATION_FIELDS)
        check_text_fields(data, OCCUPATION_TEXT_LIMITS)
        fields = parse_dates(data, ('occupation_start', 'occupation_end'))
        merged = {field: fields.get(field, getattr(occupation, field)) for field in OCCUPATION_FIELDS}
        require_fields(merged, ('occupation',))
        check_interval(merged['occupation_start'], merged['occupation_end'],
                       'occupation_start', 'occupation_end')
        with self.transaction():
            self.occupations.update(occupation, **fields)
        return occupation

    @handle_service_exceptions(logger)
    def get_database_stats(self) -> dict[str, int]:
        return self.stats_repository.get_database_stats()

    # Helpers

    def _require_individual(self, individual_id) -> int:
        """Resolve a referenced Individual id, failing like a foreign key would"""
        parsed = parse_id(individual_id, 'individual_id')
        if parsed is None:
            raise ValidationError("Missing required fields: individual_id")
        if not self.individuals.exists(parsed):
            raise MissingReferenceError(f"Individual {individual_id} does not exist")
        return parsed

    def _clean_individual(self, data: dict, allowed, existing: Individual | None = None) -> dict:
        reject_unknown_fields(data, allowed)
        check_text_fields(data, INDIVIDUAL_TEXT_LIMITS)
        check_boolean(data, 'private')
        fields = parse_dates(data, INDIVIDUAL_DATE_FIELDS)
        if 'image' in fields:
            fields['image'] = parse_id(fields['image'], 'image')

        birth = fields.get('date_of_birth', existing.date_of_birth if existing else None)
        death = fields.get('date_of_death', existing.date_of_death if existing else None)
        check_interval(birth, death, 'date_of_birth', 'date_of_death')
        return fields

    def _check_profile_image(self, individual_id: int, image_id: int) -> None:
        image = self.images.get_by_id(image_id)
        if image is None or image.individual_id != individual_id:
            raise ValidationError(f"Image {image_id} does not belong to individual {individual_id}")

    def _check_no_open_name(self, individual_id: int, exclude_id: int | None = None) -> None:
        if self.names.open_names(individual_id, exclude_id=exclude_id):
            raise DuplicateCurrentNameError(
                f"Individual {individual_id} already has a current name; close it before adding another"
            )

    def _create_name(self, individual_id: int, data: dict) -> Name:
        reject_unknown_fields(data, NAME_FIELDS)
        check_text_fields(data, NAME_TEXT_LIMITS)
        require_fields(data, NAME_REQUIRED_FIELDS)
        fields = parse_dates(data, ('date_from', 'date_to'))
        check_interval(fields.get('date_from'), fields.get('date_to'), 'date_from', 'date_to')
        if fields.get('date_to') is None:
            self._check_no_open_name(individual_id)
        return self.names.create(individual_id=individual_id, **fields)
