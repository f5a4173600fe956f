from ninja import Schema


class GeocodeResultSchema(Schema):
    name: str
    lat: float
    lng: float
