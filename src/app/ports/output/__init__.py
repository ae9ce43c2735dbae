from .geocoder import IGeocoder
from .gtfs_repository import IGtfsRepository

__all__ = [
    "IGeocoder",
    "IGtfsRepository",
]
