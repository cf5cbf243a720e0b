"""
JSON-ready dictionaries for API responses
"""

from roots_app.database.models import (
    FormerCountry,
    Image,
    Individual,
    MarriedTo,
    Name,
    Occupation,
    ParentOf,
    SiblingTo,
    User,
)
from roots_app.shared.country_normalizer import modernize_country


def _iso(value):
    return value.isoformat() if value else None


def name_to_dict(name: Name) -> dict:
    return {
        'id': name.id,
        'individual_id': name.individual_id,
        'first_name': name.first_name,
        'middle_name': name.middle_name,
        'last_name': name.last_name,
        'suffix': name.suffix,
        'full_name': name.full_name,
        'reason_for_change': name.reason_for_change,
        'date_from': _iso(name.date_from),
        'date_to': _iso(name.date_to),
        'is_current': name.is_current,
    }


def image_to_dict(image: Image) -> dict:
    return {'id': image.id, 'individual_id': image.individual_id, 'url': image.url}


def occupation_to_dict(occupation: Occupation) -> dict:
    return {
        'id': occupation.id,
        'individual_id': occupation.individual_id,
        'occupation': occupation.occupation,
        'occupation_start': _iso(occupation.occupation_start),
        'occupation_end': _iso(occupation.occupation_end),
        'employer': occupation.employer,
        'country': occupation.country,
        'state': occupation.state,
        'municipality': occupation.municipality,
    }


def individual_to_dict(individual: Individual, former_countries=(), redact: bool = False) -> dict:
    """
    Serialize an Individual

    Args:
        individual: The Individual to serialize
        former_countries: Former_countries rows used to add the modern
                          equivalents of the birth and death countries
        redact: Return only the id and privacy flag of a private Individual
    """
    if redact and individual.private:
        return {'id': individual.id, 'private': True}

    current = individual.current_name
    return {
        'id': individual.id,
        'display_name': individual.display_name,
        'current_name': name_to_dict(current) if current else None,
        'date_of_birth': _iso(individual.date_of_birth),
        'municipality_of_birth': individual.municipality_of_birth,
        'state_of_birth': individual.state_of_birth,
        'country_of_birth': individual.country_of_birth,
        'modern_country_of_birth': modernize_country(
            individual.country_of_birth, individual.date_of_birth, former_countries
        ),
        'date_of_death': _iso(individual.date_of_death),
        'municipality_of_death': individual.municipality_of_death,
        'state_of_death': individual.state_of_death,
        'country_of_death': individual.country_of_death,
        'modern_country_of_death': modernize_country(
            individual.country_of_death, individual.date_of_death, former_countries
        ),
        'is_living': individual.is_living,
        'gender': individual.gender,
        'bio': individual.bio,
        'image': individual.image,
        'created_at': individual.created_at,
        'private': bool(individual.private),
    }


def parent_link_to_dict(edge: ParentOf) -> dict:
    return {'id': edge.id, 'parent_id': edge.parent_id, 'child_id': edge.child_id}


def marriage_to_dict(marriage: MarriedTo) -> dict:
    return {
        'id': marriage.id,
        'spouse_1_id': marriage.spouse_1_id,
        'spouse_2_id': marriage.spouse_2_id,
        'marriage_date': _iso(marriage.marriage_date),
        'marriage_end_date': _iso(marriage.marriage_end_date),
        'reason_for_end': marriage.reason_for_end,
        'is_ongoing': marriage.is_ongoing,
    }


def sibling_link_to_dict(edge: SiblingTo) -> dict:
    return {'id': edge.id, 'sibling_1_id': edge.sibling_1_id, 'sibling_2_id': edge.sibling_2_id}


def user_to_dict(user: User) -> dict:
    """Account view; hashes and tokens are never included"""
    return {
        'email': user.email,
        'individual_id': user.individual_id,
        'email_state': user.email_state.value,
        'profile_complete': bool(user.profile_complete),
        'last_login': user.timestamp,
    }


def country_to_dict(country: FormerCountry) -> dict:
    return {
        'id': country.id,
        'name': country.name,
        'date_from': _iso(country.date_from),
        'date_to': _iso(country.date_to),
        'modern_location': country.modern_location,
    }
