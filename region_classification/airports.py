"""Nearest major airport lookup over a small static table (great-circle distance)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .geometry import great_circle_distance


@dataclass(frozen=True)
class Airport:
    code: str
    name: str
    lat: float
    lng: float


MAJOR_AIRPORTS: tuple[Airport, ...] = (
    # North America
    Airport("RDU", "Raleigh-Durham International", 35.8801, -78.7880),
    Airport("ATL", "Hartsfield-Jackson Atlanta", 33.6407, -84.4277),
    Airport("JFK", "John F. Kennedy International", 40.6413, -73.7781),
    Airport("LAX", "Los Angeles International", 33.9416, -118.4085),
    Airport("ORD", "Chicago O'Hare International", 41.9742, -87.9073),
    Airport("DFW", "Dallas/Fort Worth International", 32.8998, -97.0403),
    Airport("DEN", "Denver International", 39.8561, -104.6737),
    Airport("CLT", "Charlotte Douglas International", 35.2144, -80.9473),
    # International hubs
    Airport("LHR", "London Heathrow", 51.4700, -0.4543),
    Airport("CDG", "Paris Charles de Gaulle", 49.0097, 2.5479),
    Airport("HND", "Tokyo Haneda", 35.5494, 139.7798),
    Airport("PEK", "Beijing Capital", 40.0799, 116.6031),
    Airport("DXB", "Dubai International", 25.2532, 55.3657),
    Airport("SYD", "Sydney Kingsford Smith", -33.9399, 151.1753),
    Airport("GRU", "São Paulo Guarulhos", -23.4356, -46.4731),
    Airport("JNB", "Johannesburg O.R. Tambo", -26.1367, 28.2425),
)


def find_nearest_airport(
    lat: float,
    lng: float,
    airports: Sequence[Airport] = MAJOR_AIRPORTS,
) -> tuple[Airport, float]:
    """
    Closest airport to a point and its distance in kilometres.

    Ties keep the airport listed first.
    """
    if not airports:
        raise ValueError("No airports to search")

    lats = np.array([airport.lat for airport in airports])
    lngs = np.array([airport.lng for airport in airports])
    distances = great_circle_distance(lat, lng, lats, lngs)

    index = int(np.argmin(distances))
    return airports[index], float(distances[index])
