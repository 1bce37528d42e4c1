"""
List query specification.

Request arguments (page, limit, search, entity filters, sortBy, sortOrder) are
parsed and normalized once into a ``ListQuery`` and then translated into
SQLAlchemy criteria and ordering. Each list endpoint describes what it accepts
with a ``ListQuerySpec``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import and_, or_

from gameshelf.constants import MAX_DB_INTEGER
from gameshelf.utils import parse_positive_int

DEFAULT_PAGE = 1
DEFAULT_SORT = "name"


class Operator(Enum):
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    CONTAINS = "contains"

    def apply(self, column, value):
        if self is Operator.EQ:
            return column == value
        if self is Operator.GTE:
            return column >= value
        if self is Operator.LTE:
            return column <= value
        return column.ilike(f"%{escape_like(value)}%", escape="\\")


class SortOrder(Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value):
        if value is not None and str(value).strip().upper() == "DESC":
            return cls.DESC
        return cls.ASC


def escape_like(value):
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _text(value):
    value = value.strip() if isinstance(value, str) else value
    return value or None


@dataclass(frozen=True)
class FilterParam:
    """A request argument that narrows the result set"""

    param: str
    attribute: str
    operator: Operator
    parse: Callable[[Any], Any] = _text


@dataclass(frozen=True)
class Filter:
    attribute: str
    operator: Operator
    value: Any

    def criterion(self, model):
        return self.operator.apply(getattr(model, self.attribute), self.value)


@dataclass(frozen=True)
class ListQuerySpec:
    model: Any
    search_columns: Tuple[str, ...]
    # request sortBy value -> model attribute
    sort_columns: Dict[str, str]
    default_limit: int
    filters: Tuple[FilterParam, ...] = ()


@dataclass
class ListQuery:
    spec: ListQuerySpec
    page: int = DEFAULT_PAGE
    limit: int = 10
    search: Optional[str] = None
    filters: List[Filter] = field(default_factory=list)
    filter_values: Dict[str, Any] = field(default_factory=dict)
    sort_by: str = DEFAULT_SORT
    sort_order: SortOrder = SortOrder.ASC

    @classmethod
    def from_args(cls, spec, args, max_limit=None):
        page = parse_positive_int(args.get("page"), DEFAULT_PAGE)
        limit = parse_positive_int(args.get("limit"), spec.default_limit)
        if max_limit:
            limit = min(limit, max_limit)
        # Keep the offset within the database integer range
        page = min(page, MAX_DB_INTEGER // limit)

        filters = []
        filter_values = {}
        for definition in spec.filters:
            value = definition.parse(args.get(definition.param))
            filter_values[definition.param] = value
            if value is not None:
                filters.append(Filter(definition.attribute, definition.operator, value))

        sort_by = args.get("sortBy")
        if sort_by not in spec.sort_columns:
            sort_by = DEFAULT_SORT

        return cls(
            spec=spec,
            page=page,
            limit=limit,
            search=_text(args.get("search")),
            filters=filters,
            filter_values=filter_values,
            sort_by=sort_by,
            sort_order=SortOrder.parse(args.get("sortOrder")),
        )

    @property
    def offset(self):
        return (self.page - 1) * self.limit

    def criteria(self):
        model = self.spec.model
        criteria = []
        if self.search:
            criteria.append(
                or_(*[Operator.CONTAINS.apply(getattr(model, column), self.search) for column in self.spec.search_columns])
            )
        criteria.extend(f.criterion(model) for f in self.filters)
        return criteria

    def ordering(self):
        model = self.spec.model
        column = getattr(model, self.spec.sort_columns[self.sort_by])
        primary = column.desc() if self.sort_order is SortOrder.DESC else column.asc()
        return [primary, model.id.asc()]

    def apply(self, query):
        criteria = self.criteria()
        if criteria:
            query = query.filter(and_(*criteria))
        return query.order_by(*self.ordering())

    def echo(self):
        """Effective filter values, as returned to the client"""
        result = {"search": self.search}
        result.update(self.filter_values)
        result["sortBy"] = self.sort_by
        result["sortOrder"] = self.sort_order.value
        return result
