"""
Composable tenant and ownership predicates.

Every tenant-scoped read or write is built from these helpers so that the
company filter (and, for non-privileged callers, the owner filter) can never
be forgotten. Predicates are SQLAlchemy expressions; values are always bound
parameters.
"""

from typing import Any

from sqlalchemy import Select, and_, select
from sqlalchemy.sql.elements import ColumnElement

from guardpost.domain.value_objects import AccessScope


def owner_column(model: type[Any]):
    """Column holding the owning user id, or None when the model has no owner"""
    name = getattr(model, "__owner_column__", None)
    return getattr(model, name) if name else None


def company_predicate(model: type[Any], company_id: str) -> ColumnElement[bool]:
    return model.company_id == company_id


def ownership_predicate(model: type[Any], scope: AccessScope) -> ColumnElement[bool] | None:
    """
    Owner filter for the caller.

    None for privileged callers (they see every row of their company) and
    for models without an owner column.
    """
    column = owner_column(model)
    if column is None or scope.sees_all_rows:
        return None
    return column == scope.user_id


def scope_predicates(model: type[Any], scope: AccessScope) -> list[ColumnElement[bool]]:
    predicates = [company_predicate(model, scope.company_id)]
    ownership = ownership_predicate(model, scope)
    if ownership is not None:
        predicates.append(ownership)
    return predicates


def scope_clause(model: type[Any], scope: AccessScope) -> ColumnElement[bool]:
    return and_(*scope_predicates(model, scope))


def scoped_select(model: type[Any], scope: AccessScope, *criteria: ColumnElement[bool]) -> Select:
    """SELECT over model restricted to the caller's visible rows"""
    return select(model).where(scope_clause(model, scope), *criteria)
