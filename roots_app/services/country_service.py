"""
Service for the former-country lookup table
"""

import csv
from pathlib import Path

from roots_app.database.models import FormerCountry
from roots_app.repositories.account_repository import FormerCountryRepository
from roots_app.services.base_service import BaseService
from roots_app.services.exceptions import NotFoundError, ValidationError, handle_service_exceptions
from roots_app.shared.country_normalizer import find_former_country, modernize_country
from roots_app.shared.logging_config import get_project_logger
from roots_app.shared.validators import check_interval, parse_date, require_fields


logger = get_project_logger(__name__)

DEFAULT_COUNTRIES_FILE = Path(__file__).parent.parent / "database" / "default_data" / "former_countries.csv"
COUNTRY_FIELDS = ('name', 'date_from', 'date_to', 'modern_location')


class CountryService(BaseService):
    """Lookup and loading of historical country names"""

    def __init__(self, db_session=None):
        super().__init__(db_session)
        self.countries = FormerCountryRepository(self.db_session)

    @handle_service_exceptions(logger)
    def list_countries(self) -> list[FormerCountry]:
        return self.countries.list_countries()

    @handle_service_exceptions(logger)
    def lookup(self, name: str, on_date=None) -> FormerCountry:
        """The former country a recorded name refers to on a date"""
        if not name or not name.strip():
            raise ValidationError("Missing required fields: name")
        former = find_former_country(name, parse_date(on_date, 'date'), self.countries.list_countries())
        if former is None:
            raise NotFoundError(f"No former country named {name!r}" + (f" on {on_date}" if on_date else ""))
        return former

    @handle_service_exceptions(logger)
    def modern_name(self, name: str | None, on_date=None) -> str | None:
        return modernize_country(name, parse_date(on_date, 'date'), self.countries.list_countries())

    @handle_service_exceptions(logger)
    def add_country(self, data: dict) -> FormerCountry:
        fields = self._clean_country(data)
        with self.transaction():
            country = self.countries.create(**fields)
        logger.info(f"Added former country {country.name} -> {country.modern_location}")
        return country

    @handle_service_exceptions(logger)
    def load_from_csv(self, csv_path: str | Path) -> list[FormerCountry]:
        """
        Load former countries from a CSV file with a header row

        Rows already present (same name and interval) are skipped, so the
        load can be repeated.

        Args:
            csv_path: File with name, date_from, date_to, modern_location columns

        Returns:
            The rows that were created
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise NotFoundError(f"Former countries file not found: {csv_path}")

        created = []
        with open(csv_path, encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            rows = [self._clean_country(row, line) for line, row in enumerate(reader, start=2)]

        with self.transaction():
            for fields in rows:
                if self.countries.find_entry(fields['name'], fields['date_from'], fields['date_to']):
                    continue
                created.append(self.countries.create(**fields))

        logger.info(f"Loaded {len(created)} former countries from {csv_path.name} ({len(rows) - len(created)} already present)")
        return created

    def load_default_countries(self) -> list[FormerCountry]:
        return self.load_from_csv(DEFAULT_COUNTRIES_FILE)

    def _clean_country(self, data: dict, line: int | None = None) -> dict:
        where = f" (line {line})" if line else ""
        fields = {}
        for field in COUNTRY_FIELDS:
            value = data.get(field)
            fields[field] = value.strip() if isinstance(value, str) else value
        try:
            require_fields(fields, COUNTRY_FIELDS)
            fields['date_from'] = parse_date(fields['date_from'], 'date_from')
            fields['date_to'] = parse_date(fields['date_to'], 'date_to')
            check_interval(fields['date_from'], fields['date_to'], 'date_from', 'date_to')
        except ValidationError as e:
            raise type(e)(f"{e}{where}") from e
        return fields
