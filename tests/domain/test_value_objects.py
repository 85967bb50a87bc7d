"""Tests for CompanyCode and AccessScope"""

import pytest

from guardpost.domain.enums import UserRole
from guardpost.domain.value_objects import AccessScope, CompanyCode


class TestCompanyCode:
    def test_normalizes_to_upper_case(self):
        assert CompanyCode("  acme ").value == "ACME"
        assert str(CompanyCode("acme-north")) == "ACME-NORTH"

    @pytest.mark.parametrize("code", ["A", "", "   ", "ACME!", "-ACME", "ACME--NORTH", "X" * 33])
    def test_rejects_invalid_codes(self, code):
        with pytest.raises(ValueError):
            CompanyCode(code)

    def test_accepts_separators(self):
        assert CompanyCode("site_01").value == "SITE_01"


class TestAccessScope:
    def test_guard_sees_and_mutates_only_own_rows(self):
        scope = AccessScope(user_id="u1", company_id="c1", role=UserRole.GUARD)

        assert not scope.sees_all_rows
        assert scope.can_mutate("u1")
        assert not scope.can_mutate("u2")
        assert not scope.can_mutate(None)

    def test_supervisor_mutates_any_row(self):
        scope = AccessScope(user_id="u1", company_id="c1", role=UserRole.SUPERVISOR)

        assert scope.sees_all_rows
        assert scope.can_mutate("u2")
        assert not scope.is_super_admin
