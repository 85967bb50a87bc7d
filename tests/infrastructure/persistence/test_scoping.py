"""Tests for tenant and ownership predicates"""

from guardpost.domain.enums import UserRole
from guardpost.domain.value_objects import AccessScope
from guardpost.infrastructure.persistence.models import Location, PatrolRound, Visitor
from guardpost.infrastructure.persistence.scoping import (
    owner_column,
    scope_predicates,
    scoped_select,
)

GUARD = AccessScope(user_id="guard-1", company_id="acme", role=UserRole.GUARD)
SUPERVISOR = AccessScope(user_id="super-1", company_id="acme", role=UserRole.SUPERVISOR)


def compiled(stmt) -> str:
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_owner_columns():
    assert owner_column(PatrolRound) is PatrolRound.guard_id
    assert owner_column(Visitor) is Visitor.registered_by
    assert owner_column(Location) is None


def test_guard_scope_filters_company_and_owner():
    """
    GIVEN a guard
    WHEN selecting patrols
    THEN both the company and the guard's own id are filtered on
    """
    sql = compiled(scoped_select(PatrolRound, GUARD))

    assert "patrol_round.company_id = 'acme'" in sql
    assert "patrol_round.guard_id = 'guard-1'" in sql


def test_supervisor_scope_filters_company_only():
    sql = compiled(scoped_select(PatrolRound, SUPERVISOR))

    assert "patrol_round.company_id = 'acme'" in sql
    assert "guard_id" not in sql.split("WHERE", 1)[1]


def test_unowned_model_gets_company_predicate_only():
    assert len(scope_predicates(Location, GUARD)) == 1
    assert len(scope_predicates(PatrolRound, GUARD)) == 2
