"""
PawShelters - Animal Shelter Directory

This package loads animal shelters from a Supabase record store, enriches them
with their details and animal counts, and serves a searchable, filterable list.
"""

__version__ = "1.0.0"
__author__ = "Lee Whieldon"

from .agent import ShelterListController

__all__ = ["ShelterListController"]
