"""
Tests for CountryService and the default former countries data
"""

import pytest

from roots_app.database import init_db
from roots_app.database.models import FormerCountry
from roots_app.services.country_service import DEFAULT_COUNTRIES_FILE, CountryService
from roots_app.services.exceptions import InvalidIntervalError, NotFoundError, ValidationError


@pytest.fixture
def service(db):
    return CountryService()


@pytest.fixture
def countries_csv(tmp_path):
    path = tmp_path / "countries.csv"
    path.write_text(
        "name,date_from,date_to,modern_location\n"
        "Prussia,1701-01-18,1947-02-25,Germany\n"
        " Ceylon ,1948-02-04,1972-05-22, Sri Lanka\n",
        encoding='utf-8',
    )
    return path


class TestLoading:
    """Test CSV loading"""

    def test_default_file_is_packaged(self):
        assert DEFAULT_COUNTRIES_FILE.exists()

    def test_load_from_csv(self, service, countries_csv):
        loaded = service.load_from_csv(countries_csv)

        assert [c.name for c in loaded] == ['Prussia', 'Ceylon']
        assert loaded[1].modern_location == 'Sri Lanka'

    def test_load_is_idempotent(self, service, countries_csv, db):
        service.load_from_csv(countries_csv)
        assert service.load_from_csv(countries_csv) == []
        assert db.session.query(FormerCountry).count() == 2

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(NotFoundError):
            service.load_from_csv(tmp_path / "missing.csv")

    def test_reversed_interval_row_rejected(self, service, tmp_path, db):
        path = tmp_path / "bad.csv"
        path.write_text(
            "name,date_from,date_to,modern_location\n"
            "Siam,1782-04-06,1939-06-24,Thailand\n"
            "Backwards,1950-01-01,1900-01-01,Nowhere\n",
            encoding='utf-8',
        )

        with pytest.raises(InvalidIntervalError):
            service.load_from_csv(path)
        assert db.session.query(FormerCountry).count() == 0

    def test_incomplete_row_rejected(self, service, tmp_path):
        path = tmp_path / "incomplete.csv"
        path.write_text("name,date_from,date_to,modern_location\nSiam,1782-04-06,,Thailand\n", encoding='utf-8')

        with pytest.raises(ValidationError, match="date_to"):
            service.load_from_csv(path)

    def test_init_db_loads_defaults(self, db):
        loaded = init_db()

        assert len(loaded) > 0
        assert db.session.query(FormerCountry).count() == len(loaded)
        assert init_db() == []


class TestLookup:
    """Test lookups against the loaded table"""

    @pytest.fixture(autouse=True)
    def load_defaults(self, service):
        service.load_default_countries()

    def test_lookup_by_name_and_date(self, service):
        former = service.lookup('prussia', '1850-01-01')
        assert former.modern_location == 'Germany'

    def test_lookup_without_date(self, service):
        assert service.lookup('Zaire').modern_location == 'Democratic Republic of the Congo'

    def test_lookup_outside_period(self, service):
        with pytest.raises(NotFoundError):
            service.lookup('Prussia', '1990-01-01')

    def test_lookup_requires_name(self, service):
        with pytest.raises(ValidationError):
            service.lookup('  ')

    def test_lookup_bad_date(self, service):
        with pytest.raises(ValidationError):
            service.lookup('Prussia', 'eighteen-fifty')

    def test_modern_name(self, service):
        assert service.modern_name('Ceylon', '1960-01-01') == 'Sri Lanka'
        assert service.modern_name('Netherlands', '1960-01-01') == 'Netherlands'

    def test_add_country(self, service):
        added = service.add_country({
            'name': 'Kingdom of Holland', 'date_from': '1806-06-05',
            'date_to': '1810-07-09', 'modern_location': 'Netherlands',
        })

        assert added.id is not None
        assert service.modern_name('Kingdom of Holland', '1808-01-01') == 'Netherlands'

    def test_add_country_rejects_reversed_interval(self, service):
        with pytest.raises(InvalidIntervalError):
            service.add_country({
                'name': 'Backwards', 'date_from': '1900-01-01', 'date_to': '1800-01-01',
                'modern_location': 'Nowhere',
            })
