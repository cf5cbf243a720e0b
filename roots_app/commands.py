"""
Flask CLI commands for Roots
"""

import click

from roots_app.database import init_db
from roots_app.services.country_service import DEFAULT_COUNTRIES_FILE, CountryService
from roots_app.services.exceptions import ServiceError
from roots_app.services.genealogy_service import GenealogyService


STAT_LABELS = {
    'total_individuals': 'Individuals',
    'total_names': 'Names',
    'total_images': 'Images',
    'total_occupations': 'Occupations',
    'total_parent_links': 'Parent links',
    'total_marriages': 'Marriages',
    'total_sibling_links': 'Sibling links',
    'total_users': 'Users',
    'total_former_countries': 'Former countries',
}


def register_commands(app):
    """Register all CLI commands with the Flask app"""

    @app.cli.command('init-db')
    def init_database():
        """Create all tables and load the default former countries."""
        click.echo("🗄️ Initializing database...")
        try:
            loaded = init_db()
        except ServiceError as e:
            click.echo(f"❌ Database initialization failed: {e}")
            raise SystemExit(1) from e
        click.echo(f"✅ Database initialized, {len(loaded)} former countries loaded")

    @app.cli.command('load-countries')
    @click.option('--file', 'csv_file', type=click.Path(dir_okay=False),
                  default=str(DEFAULT_COUNTRIES_FILE), show_default=True,
                  help='CSV file with name,date_from,date_to,modern_location columns')
    def load_countries(csv_file):
        """Load former countries from a CSV file, skipping rows already present."""
        click.echo(f"🌍 Loading former countries from {csv_file}...")
        try:
            loaded = CountryService().load_from_csv(csv_file)
        except ServiceError as e:
            click.echo(f"❌ Loading countries failed: {e}")
            raise SystemExit(1) from e
        click.echo(f"✅ {len(loaded)} former countries added")

    @app.cli.command()
    def stats():
        """Show row counts for every table."""
        try:
            db_stats = GenealogyService().get_database_stats()
        except ServiceError as e:
            click.echo(f"❌ Could not read database statistics: {e}")
            raise SystemExit(1) from e

        click.echo("🗄️ Database Statistics:")
        for key, label in STAT_LABELS.items():
            click.echo(f"  - {label}: {db_stats.get(key, 0)}")
