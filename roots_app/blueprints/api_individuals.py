"""
Individuals API blueprint: profiles and the names, images and occupations they own
"""

from flask import Blueprint

from roots_app.blueprints.blueprint_utils import bool_arg, get_json_body
from roots_app.services.country_service import CountryService
from roots_app.services.genealogy_service import GenealogyService
from roots_app.shared.api_response_formatter import APIResponseFormatter
from roots_app.shared.serializers import (
    image_to_dict,
    individual_to_dict,
    name_to_dict,
    occupation_to_dict,
)

api_individuals = Blueprint('api_individuals', __name__, url_prefix='/api')


@api_individuals.route('/individuals', methods=['GET'])
def list_individuals():
    """List Individuals; private ones are redacted unless include_private is set"""
    include_private = bool_arg('include_private')
    individuals = GenealogyService().list_individuals()
    former_countries = CountryService().list_countries()
    return APIResponseFormatter.success({
        'individuals': [
            individual_to_dict(individual, former_countries, redact=not include_private)
            for individual in individuals
        ]
    })


@api_individuals.route('/individuals', methods=['POST'])
def create_individual():
    """Create an Individual; an optional 'name' object becomes its first Name"""
    data = dict(get_json_body())
    name = data.pop('name', None)
    individual = GenealogyService().create_individual(data, name=name)
    return APIResponseFormatter.created(
        {'individual': individual_to_dict(individual, CountryService().list_countries())},
        message='Individual created',
    )


@api_individuals.route('/individuals/<individual_id>', methods=['GET'])
def get_individual(individual_id):
    """Individual with its owned records"""
    service = GenealogyService()
    individual = service.get_individual(individual_id)
    include_private = bool_arg('include_private')
    payload = individual_to_dict(individual, CountryService().list_countries(), redact=not include_private)

    if include_private or not individual.private:
        payload['names'] = [name_to_dict(name) for name in service.list_names(individual.id)]
        payload['images'] = [image_to_dict(image) for image in individual.images]
        payload['occupations'] = [occupation_to_dict(occupation) for occupation in individual.occupations]

    return APIResponseFormatter.success({'individual': payload})


@api_individuals.route('/individuals/<individual_id>', methods=['PUT'])
def update_individual(individual_id):
    individual = GenealogyService().update_individual(individual_id, get_json_body())
    return APIResponseFormatter.success(
        {'individual': individual_to_dict(individual, CountryService().list_countries())},
        message='Individual updated',
    )


# Names

@api_individuals.route('/individuals/<individual_id>/names', methods=['GET'])
def list_names(individual_id):
    names = GenealogyService().list_names(individual_id)
    return APIResponseFormatter.success({'names': [name_to_dict(name) for name in names]})


@api_individuals.route('/individuals/<individual_id>/names', methods=['POST'])
def add_name(individual_id):
    name = GenealogyService().add_name(individual_id, get_json_body())
    return APIResponseFormatter.created({'name': name_to_dict(name)}, message='Name added')


@api_individuals.route('/individuals/<individual_id>/names/change', methods=['POST'])
def change_name(individual_id):
    """Close the current name and open a new one from effective_date"""
    data = dict(get_json_body())
    effective_date = data.pop('effective_date', None)
    name = GenealogyService().change_name(individual_id, data, effective_date)
    return APIResponseFormatter.created({'name': name_to_dict(name)}, message='Name changed')


@api_individuals.route('/names/<name_id>', methods=['PUT'])
def update_name(name_id):
    name = GenealogyService().update_name(name_id, get_json_body())
    return APIResponseFormatter.success({'name': name_to_dict(name)}, message='Name updated')


# Images

@api_individuals.route('/individuals/<individual_id>/images', methods=['GET'])
def list_images(individual_id):
    images = GenealogyService().list_images(individual_id)
    return APIResponseFormatter.success({'images': [image_to_dict(image) for image in images]})


@api_individuals.route('/individuals/<individual_id>/images', methods=['POST'])
def add_image(individual_id):
    image = GenealogyService().add_image(individual_id, get_json_body())
    return APIResponseFormatter.created({'image': image_to_dict(image)}, message='Image added')


@api_individuals.route('/images/<image_id>', methods=['PUT'])
def update_image(image_id):
    image = GenealogyService().update_image(image_id, get_json_body())
    return APIResponseFormatter.success({'image': image_to_dict(image)}, message='Image updated')


# Occupations

@api_individuals.route('/individuals/<individual_id>/occupations', methods=['GET'])
def list_occupations(individual_id):
    occupations = GenealogyService().list_occupations(individual_id)
    return APIResponseFormatter.success({
        'occupations': [occupation_to_dict(occupation) for occupation in occupations]
    })


@api_individuals.route('/individuals/<individual_id>/occupations', methods=['POST'])
def add_occupation(individual_id):
    occupation = GenealogyService().add_occupation(individual_id, get_json_body())
    return APIResponseFormatter.created({'occupation': occupation_to_dict(occupation)}, message='Occupation added')


@api_individuals.route('/occupations/<occupation_id>', methods=['PUT'])
def update_occupation(occupation_id):
    occupation = GenealogyService().update_occupation(occupation_id, get_json_body())
    return APIResponseFormatter.success({'occupation': occupation_to_dict(occupation)}, message='Occupation updated')
