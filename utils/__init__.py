"""
Módulo de utilidades
"""
from .helpers import is_nan, safe_float, is_blank, first_present, fmt_number

__all__ = [
    'is_nan',
    'safe_float',
    'is_blank',
    'first_present',
    'fmt_number',
]
