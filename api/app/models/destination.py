"""
Destination Model
"""
from dataclasses import dataclass
from typing import Dict, Optional

# CSV header -> attribute name
CSV_COLUMNS = {
    "Destination": "name",
    "Region": "region",
    "Country": "country",
    "Category": "category",
    "Approximate Annual Tourists": "approximate_annual_tourists",
    "Currency": "currency",
    "Majority Religion": "majority_religion",
    "Famous Foods": "famous_foods",
    "Language": "language",
    "Best Time to Visit": "best_time_to_visit",
    "Cost of Living": "cost_of_living",
    "Safety": "safety",
    "Cultural Significance": "cultural_significance",
    "Description": "description",
}


def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class Destination:
    id: int
    name: str
    region: str = ""
    country: str = ""
    category: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    approximate_annual_tourists: str = ""
    currency: str = ""
    majority_religion: str = ""
    famous_foods: str = ""
    language: str = ""
    best_time_to_visit: str = ""
    cost_of_living: str = ""
    safety: str = ""
    cultural_significance: str = ""
    description: str = ""

    @classmethod
    def from_csv_row(cls, destination_id: int, row: Dict[str, Optional[str]]) -> "Destination":
        """Build a destination from a CSV row whose headers are already trimmed"""
        fields = {
            attr: (row.get(column) or "").strip()
            for column, attr in CSV_COLUMNS.items()
        }
        return cls(
            id=destination_id,
            latitude=_parse_coordinate(row.get("Latitude")),
            longitude=_parse_coordinate(row.get("Longitude")),
            **fields,
        )

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __repr__(self):
        return f"<Destination {self.id} {self.name} ({self.country})>"
