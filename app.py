#!/usr/bin/env python3
"""
Roots - Flask application for a family's genealogical records
"""

import os

from flask import Flask

from roots_app.blueprints.api_auth import api_auth
from roots_app.blueprints.api_countries import api_countries
from roots_app.blueprints.api_database import api_database
from roots_app.blueprints.api_individuals import api_individuals
from roots_app.blueprints.api_relationships import api_relationships
from roots_app.commands import register_commands
from roots_app.database import init_app as init_database
from roots_app.error_handlers import register_error_handlers


class Config:
    """Configuration class for Flask app with required environment variables"""

    def __init__(self):
        # Flask configuration
        self.secret_key = self._require_env('SECRET_KEY')

        # Database configuration
        self.sqlalchemy_database_uri = self._require_env('DATABASE_URL')
        self.sqlalchemy_track_modifications = False

        # Account policy
        self.login_max_attempts = self._int_env('LOGIN_MAX_ATTEMPTS', 5)
        self.login_cooldown_seconds = self._int_env('LOGIN_COOLDOWN_SECONDS', 15 * 60)
        self.password_reset_ttl_seconds = self._int_env('PASSWORD_RESET_TTL_SECONDS', 60 * 60)

        # Echo confirmation and reset tokens in API responses (no mail delivery)
        self.return_account_tokens = os.environ.get('RETURN_ACCOUNT_TOKENS', '').lower() in ('1', 'true', 'yes')

    def _require_env(self, var_name: str) -> str:
        """Require environment variable or raise error"""
        value = os.environ.get(var_name)
        if not value:
            raise RuntimeError(f"Required environment variable {var_name} is not set")
        return value

    def _int_env(self, var_name: str, default: int) -> int:
        value = os.environ.get(var_name)
        if not value:
            return default
        try:
            return int(value)
        except ValueError as e:
            raise RuntimeError(f"Environment variable {var_name} must be an integer, got {value!r}") from e


def create_app(config=None):
    """Application factory"""
    app = Flask(__name__)

    # Initialize configuration
    if config is None:
        config = Config()

    # Set Flask config from our config object
    app.config['SECRET_KEY'] = config.secret_key
    app.config['SQLALCHEMY_DATABASE_URI'] = config.sqlalchemy_database_uri
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = config.sqlalchemy_track_modifications
    app.config['LOGIN_MAX_ATTEMPTS'] = config.login_max_attempts
    app.config['LOGIN_COOLDOWN_SECONDS'] = config.login_cooldown_seconds
    app.config['PASSWORD_RESET_TTL_SECONDS'] = config.password_reset_ttl_seconds
    app.config['RETURN_ACCOUNT_TOKENS'] = config.return_account_tokens

    # Register blueprints
    app.register_blueprint(api_individuals)
    app.register_blueprint(api_relationships)
    app.register_blueprint(api_auth)
    app.register_blueprint(api_countries)
    app.register_blueprint(api_database)

    # Initialize database
    init_database(app)

    # Register error handlers and CLI commands
    register_error_handlers(app)
    register_commands(app)

    return app


def main_cli():
    """CLI entry point"""
    app = create_app()

    print("Roots - Genealogical Records")
    print("=" * 50)
    print("API available at: http://localhost:5000/api")
    print()

    app.run(debug=True, host='0.0.0.0', port=5000)


if __name__ == '__main__':
    main_cli()
