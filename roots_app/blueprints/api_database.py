"""
Database statistics API blueprint
"""

from flask import Blueprint

from roots_app.services.genealogy_service import GenealogyService
from roots_app.shared.api_response_formatter import APIResponseFormatter


api_database = Blueprint('api_database', __name__, url_prefix='/api/database')


@api_database.route('/stats')
def get_database_stats():
    """Get database statistics"""
    stats = GenealogyService().get_database_stats()
    return APIResponseFormatter.success({'stats': stats})
