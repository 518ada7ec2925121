"""Unit tests for interface naming."""

from __future__ import annotations

import pytest

from tsmigrate.inference.naming import claim_type_name, to_pascal_case


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("props", "Props"),
        ("prevProps", "PrevProps"),
        ("user_info", "UserInfo"),
        ("$el", "El"),
        ("_", "Param"),
        ("_1st", "Param1st"),
    ],
    ids=["simple", "camel", "snake", "dollar", "underscore-only", "leading-digit"],
)
def test_to_pascal_case(text: str, expected: str) -> None:
    assert to_pascal_case(text) == expected


class TestClaimTypeName:
    def test_free_name_is_used(self) -> None:
        created: set[str] = set()
        assert claim_type_name("Props", created) == "Props"
        assert created == {"Props"}

    def test_collisions_get_numeric_suffix(self) -> None:
        created: set[str] = set()
        names = [claim_type_name("Data", created) for _ in range(3)]
        assert names == ["Data", "Data2", "Data3"]

    def test_pre_declared_names_are_avoided(self) -> None:
        assert claim_type_name("Props", {"Props"}) == "Props2"
