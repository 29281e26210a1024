"""Tests for role closure expansion."""

from __future__ import annotations

import pytest

from rolescope.expander import expand_roles, expand_roles_with_report, user_roles_with_report
from rolescope.models import CycleReport, InvalidIdentifier, RoleScheme


def _schemes(**defs: dict) -> dict[str, RoleScheme]:
    return {name: RoleScheme(name=name, **d) for name, d in defs.items()}


# ── Simple and nested roles ──────────────────────────────────────────


class TestNesting:
    def test_leaf_role(self, schemes):
        assert expand_roles(schemes, "ROLE1") == ["ROLE1"]

    def test_nested_role(self, schemes):
        assert expand_roles(schemes, "NEST1") == ["NEST1", "NEST2"]

    def test_preorder_declaration_order(self):
        s = _schemes(A={"roles": ["B", "C"]}, B={"roles": ["E"]}, C={}, E={})
        assert expand_roles(s, "A") == ["A", "B", "E", "C"]

    def test_unregistered_reference_contributes_nothing(self):
        s = _schemes(A={"roles": ["GHOST", "B"]}, B={})
        assert expand_roles(s, "A") == ["A", "B"]
        assert expand_roles(s, "GHOST") == []

    def test_empty_base_rejected(self, schemes):
        with pytest.raises(InvalidIdentifier):
            expand_roles(schemes, ":X")


# ── Decoration propagation ───────────────────────────────────────────


class TestDecoration:
    def test_decorated_leaf(self, schemes):
        assert expand_roles(schemes, "DEC1:OK") == ["DEC1:OK"]

    def test_partial_child_inherits_decoration(self, schemes):
        assert expand_roles(schemes, "DEC2:OK") == ["DEC2:OK", "DEC1:OK"]

    def test_undecorated_child_does_not_inherit(self, schemes):
        # DEC1 needs a decoration and DEC3 references it bare
        assert expand_roles(schemes, "DEC3:OK") == ["DEC3:OK", "DEC2"]

    def test_bound_and_open_children(self, schemes):
        assert expand_roles(schemes, "DEC4:OK") == ["DEC4:OK", "DEC1:SNAIL", "DEC1:OK"]

    @pytest.mark.parametrize("role", ["DEC1", "DEC4"])
    def test_unscoped_reference_to_partial_role_is_inert(self, schemes, role):
        assert expand_roles(schemes, role) == []

    def test_open_slot_stays_open_without_scope(self, schemes):
        assert expand_roles(schemes, "DEC2") == ["DEC2"]
        assert expand_roles(schemes, "DEC3") == ["DEC3", "DEC2"]

    def test_decoration_distinguishes_identity(self):
        s = _schemes(R={"require_decoration": True}, T={"roles": ["R:x", "R:y", "R:x"]})
        assert expand_roles(s, "T") == ["T", "R:x", "R:y"]

    def test_wildcard_scope_propagates(self, schemes):
        assert expand_roles(schemes, "DEC2:*") == ["DEC2:*", "DEC1:*"]


# ── Cycles and termination ───────────────────────────────────────────


class TestCycles:
    def test_two_role_cycle_terminates(self, schemes):
        assert expand_roles(schemes, "CIRC1") == ["CIRC1", "CIRC2"]

    def test_cycle_reported(self, schemes):
        closure, cycles = expand_roles_with_report(schemes, "CIRC1")
        assert closure == ["CIRC1", "CIRC2"]
        assert cycles == [CycleReport(path=("CIRC1", "CIRC2", "CIRC1"))]
        assert str(cycles[0]) == "CIRC1 -> CIRC2 -> CIRC1"
        assert cycles[0].identifier == "CIRC1"

    def test_self_reference(self):
        s = _schemes(SELF={"roles": ["SELF"]})
        closure, cycles = expand_roles_with_report(s, "SELF")
        assert closure == ["SELF"]
        assert cycles == [CycleReport(path=("SELF", "SELF"))]

    def test_diamond_is_not_a_cycle(self):
        s = _schemes(A={"roles": ["B", "C"]}, B={"roles": ["D"]}, C={"roles": ["D"]}, D={})
        closure, cycles = expand_roles_with_report(s, "A")
        assert closure == ["A", "B", "D", "C"]
        assert cycles == []

    def test_decorated_cycle(self):
        s = _schemes(
            P={"roles": ["Q:"], "require_decoration": True},
            Q={"roles": ["P:"], "require_decoration": True},
        )
        closure, cycles = expand_roles_with_report(s, "P:x")
        assert closure == ["P:x", "Q:x"]
        assert cycles[0].path == ("P:x", "Q:x", "P:x")

    def test_no_duplicates(self, schemes):
        for name in schemes:
            closure = expand_roles(schemes, name)
            assert len(closure) == len(set(closure))

    def test_shared_visited_set(self, schemes):
        visited = {"NEST2"}
        assert expand_roles(schemes, "NEST1", visited) == ["NEST1"]
        assert "NEST1" in visited

    def test_deep_chain_does_not_recurse(self):
        depth = 5000
        s = {f"R{i}": RoleScheme(name=f"R{i}", roles=[f"R{i + 1}"]) for i in range(depth)}
        closure = expand_roles(s, "R0")
        assert len(closure) == depth
        assert closure[-1] == f"R{depth - 1}"


# ── User role closure ────────────────────────────────────────────────


class TestUserRoles:
    def test_concatenates_and_dedupes(self, schemes):
        roles, _ = user_roles_with_report(schemes, ["NEST1", "NEST2", "ROLE1"])
        assert roles == ["NEST1", "NEST2", "ROLE1"]

    def test_unregistered_user_role_kept_as_leaf(self, schemes):
        roles, _ = user_roles_with_report(schemes, ["KEY1:DECOR", "ROLE1"])
        assert roles == ["KEY1:DECOR", "ROLE1"]

    def test_partial_user_role_dropped(self, schemes):
        roles, _ = user_roles_with_report(schemes, ["DEC1"])
        assert roles == []

    def test_fresh_visited_per_user_role(self, schemes):
        roles, cycles = user_roles_with_report(schemes, ["CIRC1", "CIRC2"])
        assert roles == ["CIRC1", "CIRC2"]
        assert len(cycles) == 2
