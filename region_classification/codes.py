"""
Fixed hierarchical region-code taxonomy.

Codes are grouped into numeric blocks:

- 1000-1999: major ocean basins and polar caps
- 2000-2999: North America
- 3000-3999: Asia
- 4000-4999: Europe
- 5000-5999: Africa
- 6000-6999: South America
- 9000-9999: special and fallback codes (anonymous, ocean sub-basins)

No code is ever generated at runtime; classification only selects among the
constants defined here. Every code fits in 16 bits.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any


def _freeze(tree: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(
        {key: _freeze(value) if isinstance(value, Mapping) else value for key, value in tree.items()}
    )


REGION_CODES: Mapping[str, Any] = _freeze({
    "MAJOR": {
        "NORTH_PACIFIC": 1000,
        "SOUTH_PACIFIC": 1001,
        "NORTH_ATLANTIC": 1002,
        "SOUTH_ATLANTIC": 1003,
        "INDIAN_OCEAN": 1004,
        "ARCTIC": 1005,
        "ANTARCTIC": 1006,
    },
    "NORTH_AMERICA": {
        "CANADA_WEST": 2000,   # Western Canada + Alaska
        "CANADA_EAST": 2001,
        "USA_WEST": 2010,      # Pacific coast + Mountain states
        "USA_CENTRAL": 2011,
        "USA_EAST": 2012,
        "MEXICO": 2020,
    },
    "ASIA": {
        "EAST_COAST": 3000,    # Coastal China, Korea, Japan
        "CHINA_INLAND": 3001,
        "SOUTH_EAST": 3010,
        "INDIA_NORTH": 3020,
        "INDIA_SOUTH": 3021,
        "CENTRAL": 3030,
        "MONGOLIA": 3031,
        "MIDDLE_EAST": 3040,
        "RUSSIA_WEST": 3050,
        "RUSSIA_CENTRAL": 3051,
        "RUSSIA_EAST": 3052,
    },
    "EUROPE": {
        "WEST": 4000,          # UK, France, Benelux
        "CENTRAL": 4001,
        "SOUTH": 4002,
        "NORTH": 4003,         # Nordics + Baltics
        "EAST": 4004,
    },
    "AFRICA": {
        "NORTH": 5000,
        "WEST": 5001,
        "EAST": 5002,
        "CENTRAL": 5003,
        "SOUTH": 5004,
        "SAHARA": 5005,
    },
    "SOUTH_AMERICA": {
        "BRAZIL": {
            "NORTH": 6001,
            "SOUTH": 6002,
            "AMAZON": 6003,
        },
        "ANDES": 6010,
        "SOUTHERN_CONE": 6020,
        "CENTRAL": 6030,
        "CARIBBEAN": 6040,
    },
    "SPECIAL": {
        "ANONYMOUS": 9000,
        "SATELLITE": 9001,
        "MOBILE": 9002,
        "PACIFIC_NORTHWEST": 9300,
        "PACIFIC_NORTHEAST": 9301,
        "PACIFIC_SOUTHWEST": 9302,
        "PACIFIC_SOUTHEAST": 9303,
        "PACIFIC_SOUTHEAST_DEEP": 9305,  # west of South America
        "ATLANTIC_NORTHWEST": 9310,
        "ATLANTIC_NORTHEAST": 9311,
        "ATLANTIC_SOUTHWEST": 9312,
        "ATLANTIC_SOUTHEAST": 9313,
        "INDIAN_NORTH": 9320,
        "INDIAN_SOUTH": 9321,
    },
})

ANONYMOUS: int = REGION_CODES["SPECIAL"]["ANONYMOUS"]

MAX_REGION_CODE = 0xFFFF


def iter_code_paths(
    tree: Mapping[str, Any] = REGION_CODES,
    prefix: tuple[str, ...] = (),
) -> Iterator[tuple[tuple[str, ...], int]]:
    """Yield ``(path, code)`` for every leaf, in declaration order."""
    for key, value in tree.items():
        if isinstance(value, Mapping):
            yield from iter_code_paths(value, prefix + (key,))
        else:
            yield prefix + (key,), value


CODE_PATHS: Mapping[int, tuple[str, ...]] = MappingProxyType(
    {code: path for path, code in iter_code_paths()}
)

ALL_REGION_CODES: frozenset[int] = frozenset(CODE_PATHS)


def code_for_path(dotted: str) -> int:
    """
    Resolve a dotted taxonomy path such as ``"SOUTH_AMERICA.BRAZIL.NORTH"``.

    Raises
    ------
    KeyError
        If the path does not name a leaf code.
    """
    node: Any = REGION_CODES
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            raise KeyError(f"Unknown region path: {dotted}")
        node = node[part]
    if isinstance(node, Mapping):
        raise KeyError(f"Region path is not a leaf: {dotted}")
    return node


def is_known_code(code: int) -> bool:
    return code in ALL_REGION_CODES
