from .geocoding import GeocodingController

__all__ = ["GeocodingController"]
