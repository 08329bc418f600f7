"""
SQL parameter binding utilities.

Provides placeholder naming for rendered statements and helpers for reading
bind values out of caller-defined records (dataclasses, pydantic models,
plain objects or dictionaries).
"""

import dataclasses
import re
from typing import Any, Dict, List, Mapping, Sequence

MULTI_ROW_PREFIX = "records"

_MULTI_ROW_PLACEHOLDER = re.compile(rf"(?<![:\w]):{MULTI_ROW_PREFIX}_(\d+)_(\w+)")


class ParameterNamer:
    """
    Sequential generator of bind parameter names (p1, p2, ...).

    One namer is shared by every fragment of a statement, subqueries included,
    so parameter names never collide within a rendered statement.

    Examples:
        >>> namer = ParameterNamer()
        >>> namer.next_name(), namer.next_name()
        ('p1', 'p2')
    """

    def __init__(self, prefix: str = "p"):
        self.prefix = prefix
        self._counter = 0

    def next_name(self) -> str:
        self._counter += 1
        return f"{self.prefix}{self._counter}"


def get_property(record: Any, name: str) -> Any:
    """
    Read a property from a record.

    Mappings are read by key, everything else by attribute.

    Raises:
        KeyError: If a mapping has no such key
        AttributeError: If an object has no such attribute
    """
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def set_property(record: Any, name: str, value: Any) -> None:
    """Write a property on a record (key assignment for mappings)."""
    if isinstance(record, dict):
        record[name] = value
    else:
        setattr(record, name, value)


def record_properties(record: Any) -> List[str]:
    """
    List the declared mappable properties of a record, in declaration order.

    Examples:
        >>> record_properties({"id": 1, "name": "A"})
        ['id', 'name']
    """
    if isinstance(record, Mapping):
        return [str(key) for key in record.keys()]
    if dataclasses.is_dataclass(record):
        return [field.name for field in dataclasses.fields(record)]
    model_fields = getattr(type(record), "model_fields", None)
    if isinstance(model_fields, dict):
        return list(model_fields.keys())
    return [key for key in vars(record) if not key.startswith("_")]


def row_placeholder(property_name: str) -> str:
    """Placeholder name for a property of a single-row insert."""
    return property_name


def multi_row_placeholder(index: int, property_name: str) -> str:
    """
    Placeholder name for a property of the n-th record of a multi-row insert.

    Examples:
        >>> multi_row_placeholder(0, "id")
        'records_0_id'
    """
    return f"{MULTI_ROW_PREFIX}_{index}_{property_name}"


def bind_record_parameters(sql: str, records: Sequence[Any]) -> Dict[str, Any]:
    """
    Rebuild the parameter mapping of a rendered multi-row insert.

    Used by generated-key mappers, which receive only the SQL text and the
    records.

    Examples:
        >>> bind_record_parameters(
        ...     "INSERT INTO t (id) VALUES (:records_0_id), (:records_1_id)",
        ...     [{"id": 1}, {"id": 2}],
        ... )
        {'records_0_id': 1, 'records_1_id': 2}
    """
    params: Dict[str, Any] = {}
    for match in _MULTI_ROW_PLACEHOLDER.finditer(sql):
        index, prop = int(match.group(1)), match.group(2)
        params[match.group(0)[1:]] = get_property(records[index], prop)
    return params
