"""Bilingual kinship term tables."""

from dataclasses import dataclass
from typing import Optional

from family_kinship.graph.models import Direction, RelationType

LANGUAGES = ("en", "zh")

UP = Direction.FROM    # walked from child to parent
DOWN = Direction.TO    # walked from parent to child


@dataclass(frozen=True)
class KinshipTerm:
    """Short kinship label and a sentence describing it."""
    term: str
    description: str

    def to_dict(self) -> dict:
        return {"term": self.term, "description": self.description}


@dataclass(frozen=True)
class StepPattern:
    """Match one canonical step.

    Symmetric types (spouse, sibling) match in either direction; for other
    types ``direction=None`` accepts either way.
    """
    type: RelationType
    direction: Optional[Direction] = None

    def matches(self, rel_type: RelationType, direction: Direction) -> bool:
        if rel_type is not self.type:
            return False
        if self.direction is None or rel_type.symmetric:
            return True
        return self.direction is direction


@dataclass(frozen=True)
class KinshipRule:
    """A path shape and the term it names in each language."""
    pattern: tuple[StepPattern, ...]
    en: KinshipTerm
    zh: KinshipTerm

    def matches(self, steps: list[tuple[RelationType, Direction]]) -> bool:
        if len(steps) != len(self.pattern):
            return False
        return all(p.matches(t, d) for p, (t, d) in zip(self.pattern, steps))

    def term(self, language: str) -> KinshipTerm:
        return self.zh if language == "zh" else self.en


def _rule(pattern, en_term, en_desc, zh_term, zh_desc) -> KinshipRule:
    return KinshipRule(
        pattern=tuple(StepPattern(t, d) for t, d in pattern),
        en=KinshipTerm(en_term, en_desc),
        zh=KinshipTerm(zh_term, zh_desc),
    )


PARENT = RelationType.PARENT
SPOUSE = RelationType.SPOUSE
SIBLING = RelationType.SIBLING

SELF_TERMS = {
    "en": KinshipTerm("self", "This is you"),
    "zh": KinshipTerm("自己", "这是你自己"),
}

FALLBACK_TERMS = {
    "en": KinshipTerm("relative", "Your relative"),
    "zh": KinshipTerm("亲戚", "你的亲戚"),
}

# Ordered; first match wins. Steps are canonical: child edges are already
# rewritten as parent edges walked the other way.
DEFAULT_RULES = [
    # Direct
    _rule([(PARENT, DOWN)], "child", "Your child", "子女", "你的子女"),
    _rule([(PARENT, UP)], "parent", "Your parent", "父母", "你的父母"),
    _rule([(SPOUSE, None)], "spouse", "Your spouse", "配偶", "你的配偶"),
    _rule([(SIBLING, None)], "sibling", "Your sibling", "兄弟姐妹", "你的兄弟姐妹"),

    # Two steps
    _rule([(PARENT, UP), (PARENT, UP)],
          "grandparent", "Your grandparent", "祖父母", "你的祖父母"),
    _rule([(PARENT, DOWN), (PARENT, DOWN)],
          "grandchild", "Your grandchild", "孙子女", "你的孙子女"),
    _rule([(PARENT, UP), (SIBLING, None)],
          "aunt/uncle", "Your aunt or uncle", "姑姨舅叔", "你的姑姨舅叔"),
    _rule([(SIBLING, None), (PARENT, DOWN)],
          "niece/nephew", "Your niece or nephew", "侄子女/外甥", "你的侄子女或外甥"),
    _rule([(SPOUSE, None), (PARENT, UP)],
          "parent-in-law", "Your parent-in-law", "公婆/岳父母", "你的公婆或岳父母"),
    _rule([(PARENT, DOWN), (SPOUSE, None)],
          "child-in-law", "Your child's spouse", "儿媳/女婿", "你的儿媳或女婿"),
]

# Opt-in: step relations, in-laws through siblings, and kin reached through
# a shared parent instead of a stored sibling edge.
EXTENDED_RULES = [
    _rule([(PARENT, UP), (PARENT, DOWN)],
          "sibling", "Your sibling", "兄弟姐妹", "你的兄弟姐妹"),
    _rule([(PARENT, UP), (SPOUSE, None)],
          "step-parent", "Your parent's spouse", "继父母", "你的继父母"),
    _rule([(SPOUSE, None), (PARENT, DOWN)],
          "step-child", "Your spouse's child", "继子女", "你的继子女"),
    _rule([(SPOUSE, None), (SIBLING, None)],
          "sibling-in-law", "Your spouse's sibling", "姻亲兄弟姐妹", "你的姻亲兄弟姐妹"),
    _rule([(SIBLING, None), (SPOUSE, None)],
          "sibling-in-law", "Your sibling's spouse", "姻亲兄弟姐妹", "你的姻亲兄弟姐妹"),
    _rule([(PARENT, UP), (PARENT, UP), (PARENT, DOWN)],
          "aunt/uncle", "Your aunt or uncle", "姑姨舅叔", "你的姑姨舅叔"),
    _rule([(PARENT, UP), (PARENT, DOWN), (PARENT, DOWN)],
          "niece/nephew", "Your niece or nephew", "侄子女/外甥", "你的侄子女或外甥"),
]


def normalize_language(language) -> str:
    """Map a language code to a supported one; unknown codes become English."""
    if isinstance(language, str) and language.strip().lower().startswith("zh"):
        return "zh"
    return "en"
