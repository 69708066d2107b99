# core/lookups.py

"""
Dropdown lookup tables for cascading selections.

Rows are read from Supabase once per cache window and grouped into
parent → children tables keyed by stringified ids, e.g.

    properties_by_city = {"3": ["12", "15"], "4": []}

Display names travel separately in `labels` so ids stay unambiguous
(two cities can both have a "123 Main St").
"""

from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from core.cache import cached
from core.cascading import CascadingSelectionResolver
from core.config import settings
from core.errors import InvalidArgument, handle_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.selection import CascadeLookups


LOOKUPS_CACHE_PREFIX = "lookups"


# -----------------------------------------------------
# Cascade definitions
# -----------------------------------------------------
class CascadeDefinition(BaseModel):
    levels: List[str]
    root: str            # key of the root option list in dropdown data
    tables: List[str]    # keys of the lookup tables, one per transition


CASCADES: Dict[str, CascadeDefinition] = {
    # Move-outs, vendor tasks, applications
    "location": CascadeDefinition(
        levels=["city", "property", "unit"],
        root="cities",
        tables=["properties_by_city", "units_by_property"],
    ),
    # Notices & evictions, offers & renewals
    "occupancy": CascadeDefinition(
        levels=["city", "property", "unit", "tenant"],
        root="cities",
        tables=["properties_by_city", "units_by_property", "tenants_by_unit"],
    ),
    # Payments, payment plans
    "tenant_unit": CascadeDefinition(
        levels=["tenant", "unit"],
        root="tenants",
        tables=["units_by_tenant"],
    ),
}


# -----------------------------------------------------
# Row grouping
# -----------------------------------------------------
def _key(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def build_lookup_table(
    rows: Iterable[Mapping],
    parent_key: str,
    child_key: str,
    parents: Optional[Iterable] = None,
) -> Dict[str, List[str]]:
    """
    Group `rows` into {parent: [child, ...]}.

    Row order is kept, duplicate children are dropped, rows without a
    parent are skipped. A parent whose only rows lack a child still gets
    an empty entry. Every value in `parents` gets an entry,
    even with no children.
    """
    table: Dict[str, List[str]] = {}

    for parent in parents or []:
        parent = _key(parent)
        if parent is not None:
            table.setdefault(parent, [])

    for row in rows:
        parent = _key(row.get(parent_key))
        child = _key(row.get(child_key))
        if parent is None:
            continue
        children = table.setdefault(parent, [])
        if child is None:
            continue
        if child not in children:
            children.append(child)

    return table


def build_labels(rows: Iterable[Mapping], key: str, label) -> Dict[str, str]:
    """id → display label. `label` is a column name or a row → str callable."""
    labels = {}
    for row in rows:
        row_id = _key(row.get(key))
        if row_id is None:
            continue
        labels[row_id] = label(row) if callable(label) else str(row.get(label) or "")
    return labels


def tenant_full_name(row: Mapping) -> str:
    return " ".join(p for p in (row.get("first_name"), row.get("last_name")) if p)


# -----------------------------------------------------
# Supabase reads
# -----------------------------------------------------
def _select(client, table: str, columns: str, *order_by: str) -> List[dict]:
    try:
        query = client.table(table).select(columns)
        for column in order_by:
            query = query.order(column)
        return query.execute().data or []
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to load {table}")


@cached(LOOKUPS_CACHE_PREFIX, ttl_seconds=lambda: settings.LOOKUP_CACHE_TTL_SECONDS)
def get_dropdown_data() -> dict:
    """
    Root options, labels and lookup tables for every cascade.
    Cached for LOOKUP_CACHE_TTL_SECONDS.
    """
    client = get_supabase_client()
    if not client:
        raise handle_supabase_error(
            RuntimeError("Supabase client not configured"), "Failed to load lookup data"
        )

    cities = _select(client, "cities", "id, city", "city")
    properties = _select(client, "properties", "id, property_name, city_id", "property_name")
    units = _select(client, "units", "id, unit_name, property_id", "unit_name")
    tenants = _select(client, "tenants", "id, first_name, last_name, unit_id", "first_name", "last_name")

    city_ids = [_key(c.get("id")) for c in cities if _key(c.get("id"))]
    property_ids = [_key(p.get("id")) for p in properties if _key(p.get("id"))]
    unit_ids = [_key(u.get("id")) for u in units if _key(u.get("id"))]
    tenant_ids = [_key(t.get("id")) for t in tenants if _key(t.get("id"))]

    logger.info(
        f"Loaded lookup data: {len(city_ids)} cities, {len(property_ids)} properties, "
        f"{len(unit_ids)} units, {len(tenant_ids)} tenants"
    )

    return {
        "cities": city_ids,
        "tenants": tenant_ids,
        "tables": {
            "properties_by_city": build_lookup_table(properties, "city_id", "id", parents=city_ids),
            "units_by_property": build_lookup_table(units, "property_id", "id", parents=property_ids),
            "tenants_by_unit": build_lookup_table(tenants, "unit_id", "id", parents=unit_ids),
            "units_by_tenant": build_lookup_table(tenants, "id", "unit_id"),
        },
        "labels": {
            "city": build_labels(cities, "id", "city"),
            "property": build_labels(properties, "id", "property_name"),
            "unit": build_labels(units, "id", "unit_name"),
            "tenant": build_labels(tenants, "id", tenant_full_name),
        },
    }


# -----------------------------------------------------
# Cascade helpers
# -----------------------------------------------------
def get_cascade(name: str) -> CascadeDefinition:
    cascade = CASCADES.get(name)
    if cascade is None:
        raise InvalidArgument(f"Unknown cascade '{name}', expected one of {sorted(CASCADES)}")
    return cascade


def cascade_lookups(name: str, data: Optional[dict] = None) -> CascadeLookups:
    cascade = get_cascade(name)
    data = data if data is not None else get_dropdown_data()

    return CascadeLookups(
        cascade=name,
        levels=cascade.levels,
        root_options=data[cascade.root],
        tables=[data["tables"][t] for t in cascade.tables],
        labels={level: data["labels"].get(level, {}) for level in cascade.levels},
    )


def build_resolver(name: str, data: Optional[dict] = None) -> CascadingSelectionResolver:
    """Fresh resolver for `name`, all levels unselected."""
    lookups = cascade_lookups(name, data)
    return CascadingSelectionResolver(
        lookups.levels,
        lookups.tables,
        root_options=lookups.root_options,
    )
