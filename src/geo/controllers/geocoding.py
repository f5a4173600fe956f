from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from ninja_extra import ControllerBase, api_controller, route

from common.throttling import GeoThrottle
from geo.schema import GeocodeResultSchema
from geo.service import GeocodeResult, GeocodingClient


@api_controller("/geo", throttle=GeoThrottle(), tags=["Geo"])
class GeocodingController(ControllerBase):
    def get_client(self) -> GeocodingClient:
        return GeocodingClient()

    @route.get("/search", response=list[GeocodeResultSchema], url_name="geo-search")
    def search(self, q: str, limit: int | None = None, countrycodes: str = "") -> list[GeocodeResult]:
        """Search places by free text, for location autocomplete.

        Queries shorter than two characters return an empty list.
        """
        return self.get_client().search(q, limit=limit, countrycodes=countrycodes)

    @route.get("/geocode", response=GeocodeResultSchema, url_name="geo-geocode")
    def geocode(self, q: str) -> GeocodeResult:
        """Resolve a free-text place to a single point. 404 when nothing matches."""
        result = self.get_client().geocode(q)
        if result is None:
            raise HttpError(404, str(_("No location found for this query.")))
        return result
