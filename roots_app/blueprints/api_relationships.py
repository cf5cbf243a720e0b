"""
Relationships API blueprint: parent/child, marriage and sibling edges
"""

from flask import Blueprint

from roots_app.blueprints.blueprint_utils import get_json_body
from roots_app.services.country_service import CountryService
from roots_app.services.relationship_service import RelationshipService
from roots_app.shared.api_response_formatter import APIResponseFormatter
from roots_app.shared.serializers import (
    individual_to_dict,
    marriage_to_dict,
    parent_link_to_dict,
    sibling_link_to_dict,
)

api_relationships = Blueprint('api_relationships', __name__, url_prefix='/api')


def _individuals_response(key: str, individuals) -> tuple:
    former_countries = CountryService().list_countries()
    return APIResponseFormatter.success({
        key: [individual_to_dict(individual, former_countries, redact=True) for individual in individuals]
    })


@api_relationships.route('/relationships/parents', methods=['POST'])
def add_parent():
    data = get_json_body()
    edge = RelationshipService().add_parent(data.get('parent_id'), data.get('child_id'))
    return APIResponseFormatter.created({'parent_link': parent_link_to_dict(edge)}, message='Parent linked')


@api_relationships.route('/individuals/<individual_id>/parents', methods=['GET'])
def get_parents(individual_id):
    return _individuals_response('parents', RelationshipService().get_parents(individual_id))


@api_relationships.route('/individuals/<individual_id>/children', methods=['GET'])
def get_children(individual_id):
    return _individuals_response('children', RelationshipService().get_children(individual_id))


@api_relationships.route('/relationships/marriages', methods=['POST'])
def add_marriage():
    data = get_json_body()
    marriage = RelationshipService().add_marriage(
        data.get('spouse_1_id'),
        data.get('spouse_2_id'),
        data.get('marriage_date'),
        marriage_end_date=data.get('marriage_end_date'),
        reason_for_end=data.get('reason_for_end'),
    )
    return APIResponseFormatter.created({'marriage': marriage_to_dict(marriage)}, message='Marriage recorded')


@api_relationships.route('/relationships/marriages/<marriage_id>/end', methods=['POST'])
def end_marriage(marriage_id):
    data = get_json_body()
    marriage = RelationshipService().end_marriage(
        marriage_id, data.get('marriage_end_date'), data.get('reason_for_end')
    )
    return APIResponseFormatter.success({'marriage': marriage_to_dict(marriage)}, message='Marriage ended')


@api_relationships.route('/individuals/<individual_id>/marriages', methods=['GET'])
def get_marriages(individual_id):
    marriages = RelationshipService().get_marriages(individual_id)
    return APIResponseFormatter.success({'marriages': [marriage_to_dict(marriage) for marriage in marriages]})


@api_relationships.route('/relationships/siblings', methods=['POST'])
def add_sibling():
    data = get_json_body()
    edge = RelationshipService().add_sibling(data.get('sibling_1_id'), data.get('sibling_2_id'))
    return APIResponseFormatter.created({'sibling_link': sibling_link_to_dict(edge)}, message='Siblings linked')


@api_relationships.route('/individuals/<individual_id>/siblings', methods=['GET'])
def get_siblings(individual_id):
    return _individuals_response('siblings', RelationshipService().get_siblings(individual_id))
