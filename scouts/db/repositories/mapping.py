"""
Reconstruction of nested aggregates from flattened join rows.

A LEFT JOIN of a parent table with its child tables yields one row per
parent x child combination, with NULL child columns when a parent has no
children. :func:`assemble` folds such rows back into one aggregate per
parent key:

* ordered collections are keyed by their order column and sorted by it, so
  row arrival order never matters and a child repeated by the cross product
  with another collection is kept once;
* unordered collections are keyed by child id and become frozensets;
* a parent seen only with NULL child columns gets empty collections.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

Row = Mapping[str, Any]


@dataclass(frozen=True)
class CollectionPlan:
    """How to fold one child collection out of the joined rows."""

    attribute: str
    key_column: str
    build: Callable[[Row], Any]
    ordered: bool = False


@dataclass(frozen=True)
class AggregatePlan:
    """How to build one aggregate type from joined rows."""

    target: type
    key_column: str
    build_root: Callable[[Row], Dict[str, Any]]
    collections: Tuple[CollectionPlan, ...] = field(default_factory=tuple)


class _Partial:
    __slots__ = ("fields", "children")

    def __init__(self, fields: Dict[str, Any], plan: AggregatePlan) -> None:
        self.fields = fields
        self.children: Dict[str, Dict[Hashable, Any]] = {c.attribute: {} for c in plan.collections}


def assemble(
    rows: Iterable[Row],
    plan: AggregatePlan,
    sort_key: Optional[Callable[[Any], Any]] = None,
) -> List[Any]:
    """Return one aggregate per distinct parent key found in ``rows``.

    Aggregates are ordered by parent key unless ``sort_key`` is given.
    """
    partials: Dict[Hashable, _Partial] = {}
    for row in rows:
        parent_key = row[plan.key_column]
        partial = partials.get(parent_key)
        if partial is None:
            partial = _Partial(plan.build_root(row), plan)
            partials[parent_key] = partial
        for collection in plan.collections:
            child_key = row[collection.key_column]
            if child_key is None:
                continue
            bucket = partial.children[collection.attribute]
            if child_key not in bucket:
                bucket[child_key] = collection.build(row)

    aggregates = [_materialize(partials[key], plan) for key in sorted(partials)]
    if sort_key is not None:
        aggregates.sort(key=sort_key)
    return aggregates


def _materialize(partial: _Partial, plan: AggregatePlan) -> Any:
    values = dict(partial.fields)
    for collection in plan.collections:
        bucket = partial.children[collection.attribute]
        if collection.ordered:
            values[collection.attribute] = tuple(bucket[k] for k in sorted(bucket))
        else:
            values[collection.attribute] = frozenset(bucket.values())
    return plan.target(**values)
