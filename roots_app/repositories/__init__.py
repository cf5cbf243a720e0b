"""
Repository layer for data access
"""

from .account_repository import FormerCountryRepository, UserRepository
from .genealogy_repository import (
    GenealogyDataRepository,
    ImageRepository,
    IndividualRepository,
    NameRepository,
    OccupationRepository,
)
from .relationship_repository import MarriageRepository, ParentOfRepository, SiblingRepository


__all__ = [
    'FormerCountryRepository',
    'GenealogyDataRepository',
    'ImageRepository',
    'IndividualRepository',
    'MarriageRepository',
    'NameRepository',
    'OccupationRepository',
    'ParentOfRepository',
    'SiblingRepository',
    'UserRepository',
]
