"""
Former countries lookup API blueprint
"""

from flask import Blueprint, request

from roots_app.services.country_service import CountryService
from roots_app.shared.api_response_formatter import APIResponseFormatter
from roots_app.shared.serializers import country_to_dict


api_countries = Blueprint('api_countries', __name__, url_prefix='/api/countries')


@api_countries.route('', methods=['GET'])
def list_countries():
    countries = CountryService().list_countries()
    return APIResponseFormatter.success({'countries': [country_to_dict(country) for country in countries]})


@api_countries.route('/lookup', methods=['GET'])
def lookup_country():
    """Modern equivalent of ?name=, optionally as of ?date=YYYY-MM-DD"""
    name = request.args.get('name', '')
    on_date = request.args.get('date')
    former = CountryService().lookup(name, on_date)
    return APIResponseFormatter.success({
        'country': country_to_dict(former),
        'modern_location': former.modern_location,
    })
