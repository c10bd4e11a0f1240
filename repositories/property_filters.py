"""
repositories/property_filters.py
--------------------------------
Builds the property search query from a fixed set of optional filters.

Each filter maps one option key to a clause template with a single
``%s`` placeholder. Values only ever travel through the parameter list,
so the SQL text is assembled from constants alone.
"""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Mapping, Optional

from config import DEFAULT_RESULT_LIMIT, PRICE_FILTER_MULTIPLIER


@dataclass
class PropertySearchOptions:
    """Optional search criteria. Falsy values (None, 0, "") mean "no filter"."""
    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[float] = None
    maximum_price_per_night: Optional[float] = None
    minimum_rating: Optional[float] = None


@dataclass(frozen=True)
class PropertyFilter:
    key: str
    clause: str
    coerce: Callable[[Any], Any]
    aggregate: bool = False  # goes into HAVING instead of WHERE


def _price(value: Any) -> float:
    return float(value) * PRICE_FILTER_MULTIPLIER


PROPERTY_FILTERS: tuple[PropertyFilter, ...] = (
    PropertyFilter("city", "properties.city ILIKE %s", lambda v: f"%{v}%"),
    PropertyFilter("owner_id", "properties.owner_id = %s", int),
    PropertyFilter("minimum_price_per_night", "properties.cost_per_night >= %s", _price),
    PropertyFilter("maximum_price_per_night", "properties.cost_per_night <= %s", _price),
    PropertyFilter("minimum_rating", "avg(property_reviews.rating) >= %s", float, aggregate=True),
)

_SELECT_PROPERTIES = """
    SELECT properties.*, avg(property_reviews.rating) AS average_rating
    FROM properties
    LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
"""


def _as_mapping(options) -> Mapping[str, Any]:
    if options is None:
        return {}
    if isinstance(options, PropertySearchOptions):
        return asdict(options)
    if not isinstance(options, Mapping):
        raise TypeError(f"search options must be a mapping, not {type(options).__name__}")
    return options


def build_property_search(options=None, limit: int = DEFAULT_RESULT_LIMIT) -> tuple[str, list]:
    """
    Build the SQL and parameters for a property search.

    Args:
        options: A mapping or PropertySearchOptions. Unknown keys are ignored.
        limit: Maximum number of rows to return.

    Returns:
        ``(sql, params)`` where params line up with the ``%s`` placeholders
        in order: WHERE values, HAVING values, then the limit.

    Raises:
        TypeError: If options is neither a mapping nor PropertySearchOptions.
        ValueError / TypeError: If an active filter value cannot be coerced.
    """
    opts = _as_mapping(options)
    where: list[str] = []
    having: list[str] = []
    where_params: list = []
    having_params: list = []

    for f in PROPERTY_FILTERS:
        value = opts.get(f.key)
        if not value:
            continue
        if f.aggregate:
            having.append(f.clause)
            having_params.append(f.coerce(value))
        else:
            where.append(f.clause)
            where_params.append(f.coerce(value))

    sql = _SELECT_PROPERTIES
    if where:
        sql += "    WHERE " + " AND ".join(where) + "\n"
    sql += "    GROUP BY properties.id\n"
    if having:
        sql += "    HAVING " + " AND ".join(having) + "\n"
    sql += "    ORDER BY properties.cost_per_night\n    LIMIT %s;"

    return sql, where_params + having_params + [int(limit)]
