"""
Shared utilities for Roots: validation, serialization and historical country names
"""

from .country_normalizer import find_former_country, modernize_country
from .validators import check_interval, parse_date


__all__ = [
    'find_former_country', 'modernize_country', 'check_interval', 'parse_date'
]
