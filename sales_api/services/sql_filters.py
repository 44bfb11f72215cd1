"""SQLAlchemy translation of predicate trees and sort directives."""
from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

from sales_api.models.sale import Sale, SaleTag
from sales_api.services.predicates import And, Contains, In, Or, Overlaps, Predicate, Range
from sales_api.services.sorting import SortDirective

LIKE_ESCAPE = "\\"

# field -> (relationship, element column)
MULTI_VALUED_FIELDS = {
    "tags": (Sale.tags, SaleTag.tag),
}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _column(field: str):
    if field in MULTI_VALUED_FIELDS or not hasattr(Sale, field):
        raise ValueError(f"Unknown scalar field: {field}")
    return getattr(Sale, field)


def to_sql(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree into a ``WHERE`` expression on ``Sale``."""
    if isinstance(predicate, And):
        if not predicate.conditions:
            return true()
        return and_(*(to_sql(c) for c in predicate.conditions))

    if isinstance(predicate, Or):
        if not predicate.conditions:
            return false()
        return or_(*(to_sql(c) for c in predicate.conditions))

    if isinstance(predicate, Contains):
        pattern = f"%{escape_like(predicate.value)}%"
        return _column(predicate.field).ilike(pattern, escape=LIKE_ESCAPE)

    if isinstance(predicate, In):
        return _column(predicate.field).in_(predicate.values)

    if isinstance(predicate, Overlaps):
        if predicate.field not in MULTI_VALUED_FIELDS:
            raise ValueError(f"Unknown multi-valued field: {predicate.field}")
        relation, element = MULTI_VALUED_FIELDS[predicate.field]
        return relation.any(element.in_(predicate.values))

    if isinstance(predicate, Range):
        column = _column(predicate.field)
        bounds = []
        if predicate.gte is not None:
            bounds.append(column >= predicate.gte)
        if predicate.lte is not None:
            bounds.append(column <= predicate.lte)
        return and_(*bounds) if bounds else true()

    raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")


def order_by_clause(directive: SortDirective):
    column = _column(directive.field)
    return column.desc() if directive.descending else column.asc()
