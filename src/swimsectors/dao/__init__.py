"""Data Access Objects for swimsectors database operations."""

from swimsectors.dao.base import BaseDAO, IdentityResolutionError, SupabaseClient
from swimsectors.dao.event_dao import EventDAO
from swimsectors.dao.sector_dao import SectorDAO
from swimsectors.dao.splash_dao import SplashDAO
from swimsectors.dao.swimmer_dao import SwimmerDAO

__all__ = [
    # Base
    "BaseDAO",
    "IdentityResolutionError",
    "SupabaseClient",
    # DAOs
    "EventDAO",
    "SectorDAO",
    "SplashDAO",
    "SwimmerDAO",
]
