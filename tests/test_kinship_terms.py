"""Test kinship term resolution."""

import pytest

from family_kinship.graph.models import (
    Direction,
    KinshipResult,
    PathStatus,
    PathStep,
    RelationshipEdge,
    RelationshipPath,
    RelationType,
)
from family_kinship.kinship.resolver import KinshipTermResolver
from family_kinship.kinship.terms import StepPattern, normalize_language


def step(rel_type: str, direction: str) -> PathStep:
    return PathStep(RelationshipEdge(1, 2, rel_type), Direction(direction))


@pytest.fixture
def resolver():
    return KinshipTermResolver()


class TestSelfAndFallback:
    """Tests for empty paths and the generic term."""

    def test_empty_path_is_self(self, resolver):
        """An empty path names the querying person."""
        assert resolver.resolve([], "en").term == "self"
        assert resolver.resolve([], "en").description == "This is you"
        assert resolver.resolve([], "zh").term == "自己"
        assert resolver.resolve([], "zh").description == "这是你自己"

    def test_none_path_is_self(self, resolver):
        assert resolver.resolve(None).term == "self"

    def test_unreachable_path_is_relative(self, resolver):
        """An empty path tagged UNREACHABLE is not mistaken for self."""
        path = RelationshipPath(status=PathStatus.UNREACHABLE)
        assert resolver.resolve(path, "en").term == "relative"
        assert resolver.resolve(path, "zh").term == "亲戚"

    def test_long_path_is_relative(self, resolver):
        """Paths beyond two steps use the fallback."""
        path = [step("parent", "from")] * 3
        kinship = resolver.resolve(path, "en")
        assert kinship.term == "relative"
        assert kinship.description == "Your relative"
        assert resolver.resolve(path, "zh").description == "你的亲戚"

    def test_two_siblings_is_relative(self, resolver):
        """Unknown two-step combinations fall through."""
        path = [step("sibling", "to"), step("sibling", "from")]
        assert resolver.resolve(path, "en").term == "relative"

    def test_malformed_steps_are_relative(self, resolver):
        """Unparseable steps never raise."""
        assert resolver.resolve([object()], "en").term == "relative"
        assert resolver.resolve([{"type": "parent"}], "en").term == "relative"

    def test_non_iterable_path_is_relative(self, resolver):
        """A path that is not a sequence resolves to the fallback instead of raising."""
        assert resolver.resolve(42, "en").term == "relative"
        assert resolver.resolve(object(), "zh").term == "亲戚"

    def test_default_result_path_keeps_status(self, resolver):
        """A result built without a path is not named as self."""
        result = KinshipResult(status=PathStatus.UNREACHABLE)
        assert result.path == []
        assert result.path.status is PathStatus.UNREACHABLE
        assert resolver.resolve(result.path, "en").term == "relative"

    def test_unknown_language_falls_back_to_english(self, resolver):
        assert resolver.resolve([step("spouse", "to")], "fr").term == "spouse"
        assert resolver.resolve([step("spouse", "to")], None).term == "spouse"


class TestDirectRelations:
    """Tests for single-step paths."""

    @pytest.mark.parametrize("rel_type,direction,en,zh", [
        ("parent", "to", "child", "子女"),
        ("parent", "from", "parent", "父母"),
        ("spouse", "to", "spouse", "配偶"),
        ("spouse", "from", "spouse", "配偶"),
        ("sibling", "to", "sibling", "兄弟姐妹"),
        ("sibling", "from", "sibling", "兄弟姐妹"),
    ])
    def test_single_step_table(self, resolver, rel_type, direction, en, zh):
        path = [step(rel_type, direction)]
        assert resolver.resolve(path, "en").term == en
        assert resolver.resolve(path, "zh").term == zh

    def test_child_edges_mirror_parent_edges(self, resolver):
        """A stored child edge walked 'to' reaches a parent."""
        assert resolver.resolve([step("child", "to")], "en").term == "parent"
        assert resolver.resolve([step("child", "from")], "en").term == "child"

    def test_descriptions(self, resolver):
        assert resolver.resolve([step("parent", "to")], "en").description == "Your child"
        assert resolver.resolve([step("parent", "from")], "zh").description == "你的父母"


class TestTwoStepRelations:
    """Tests for the compound relationship table."""

    @pytest.mark.parametrize("steps,en,zh", [
        ([("parent", "from"), ("parent", "from")], "grandparent", "祖父母"),
        ([("parent", "to"), ("parent", "to")], "grandchild", "孙子女"),
        ([("parent", "from"), ("sibling", "from")], "aunt/uncle", "姑姨舅叔"),
        ([("sibling", "from"), ("parent", "to")], "niece/nephew", "侄子女/外甥"),
        ([("spouse", "to"), ("parent", "from")], "parent-in-law", "公婆/岳父母"),
        ([("parent", "to"), ("spouse", "from")], "child-in-law", "儿媳/女婿"),
    ])
    def test_two_step_table(self, resolver, steps, en, zh):
        path = [step(t, d) for t, d in steps]
        assert resolver.resolve(path, "en").term == en
        assert resolver.resolve(path, "zh").term == zh

    def test_sibling_direction_does_not_matter(self, resolver):
        """Sibling edges are symmetric regardless of stored orientation."""
        path = [step("parent", "from"), step("sibling", "to")]
        assert resolver.resolve(path, "en").term == "aunt/uncle"

    def test_symmetric_patterns_ignore_direction(self):
        """A spouse or sibling pattern matches both walk directions."""
        for rel_type in (RelationType.SPOUSE, RelationType.SIBLING):
            pattern = StepPattern(rel_type, Direction.TO)
            assert pattern.matches(rel_type, Direction.TO)
            assert pattern.matches(rel_type, Direction.FROM)

    def test_parent_patterns_respect_direction(self):
        pattern = StepPattern(RelationType.PARENT, Direction.FROM)
        assert pattern.matches(RelationType.PARENT, Direction.FROM)
        assert not pattern.matches(RelationType.PARENT, Direction.TO)
        assert not pattern.matches(RelationType.SPOUSE, Direction.FROM)

    def test_mixed_parent_and_child_edges(self, resolver):
        """Grandparent through one parent edge and one child edge."""
        path = [step("child", "to"), step("parent", "from")]
        assert resolver.resolve(path, "en").term == "grandparent"

    def test_shared_parent_not_in_default_table(self, resolver):
        """Up then down through a parent is only named by the extended table."""
        path = [step("parent", "from"), step("parent", "to")]
        assert resolver.resolve(path, "en").term == "relative"


class TestExtendedTerms:
    """Tests for the opt-in extended table."""

    @pytest.mark.parametrize("steps,en", [
        ([("parent", "from"), ("parent", "to")], "sibling"),
        ([("parent", "from"), ("spouse", "to")], "step-parent"),
        ([("spouse", "to"), ("parent", "to")], "step-child"),
        ([("spouse", "to"), ("sibling", "to")], "sibling-in-law"),
        ([("sibling", "to"), ("spouse", "to")], "sibling-in-law"),
        ([("parent", "from"), ("parent", "from"), ("parent", "to")], "aunt/uncle"),
        ([("parent", "from"), ("parent", "to"), ("parent", "to")], "niece/nephew"),
    ])
    def test_extended_rules(self, steps, en):
        resolver = KinshipTermResolver(extended=True)
        assert resolver.resolve([step(t, d) for t, d in steps], "en").term == en

    def test_default_rules_still_win(self):
        """Extended rules are appended after the default table."""
        resolver = KinshipTermResolver(extended=True)
        path = [step("parent", "from"), step("parent", "from")]
        assert resolver.resolve(path, "en").term == "grandparent"

    def test_custom_rule_list(self):
        """An empty rule list names nothing but self."""
        resolver = KinshipTermResolver(rules=[])
        assert resolver.resolve([step("spouse", "to")], "en").term == "relative"
        assert resolver.resolve([], "en").term == "self"


class TestSerializedSteps:
    """Tests for steps given as plain mappings."""

    def test_mapping_steps(self, resolver):
        path = [
            {"from_id": 1, "to_id": 2, "type": "parent", "direction": "from"},
            {"fromId": 2, "toId": 3, "type": "parent", "direction": "from"},
        ]
        assert resolver.resolve(path, "en").term == "grandparent"

    def test_bilingual(self, resolver):
        terms = resolver.resolve_bilingual([step("spouse", "to")])
        assert terms["en"].term == "spouse"
        assert terms["zh"].term == "配偶"


class TestLanguage:
    """Tests for language code normalization."""

    @pytest.mark.parametrize("code,expected", [
        ("en", "en"), ("zh", "zh"), ("ZH", "zh"), ("zh-CN", "zh"),
        ("zh_TW", "zh"), ("fr", "en"), ("", "en"), (None, "en"),
    ])
    def test_normalize_language(self, code, expected):
        assert normalize_language(code) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
