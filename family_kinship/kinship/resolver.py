"""Map relationship paths to kinship terms."""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional, Sequence

from family_kinship.graph.index import RelationshipGraphIndex
from family_kinship.graph.models import (
    Direction,
    KinshipResult,
    PathStatus,
    PathStep,
    RelationType,
)
from family_kinship.kinship.terms import (
    DEFAULT_RULES,
    EXTENDED_RULES,
    FALLBACK_TERMS,
    LANGUAGES,
    SELF_TERMS,
    KinshipRule,
    KinshipTerm,
    normalize_language,
)

logger = logging.getLogger(__name__)


def _canonical_step(step) -> Optional[tuple[RelationType, Direction]]:
    """(type, direction) of a PathStep or a serialized step, or None."""
    if isinstance(step, PathStep):
        return step.canonical()
    if isinstance(step, Mapping):
        parsed = PathStep.from_dict(step)
        return parsed.canonical() if parsed else None
    return None


class KinshipTermResolver:
    """Resolve a path of direction-tagged steps to a bilingual kinship term.

    Total over its input: malformed steps, long paths and shapes missing from
    the rule table all resolve to the generic "relative" term.
    """

    def __init__(self, rules: Optional[Sequence[KinshipRule]] = None, extended: bool = False):
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        if extended:
            self.rules.extend(EXTENDED_RULES)

    def resolve(self, path: Optional[Iterable] = None, language: str = "en") -> KinshipTerm:
        lang = normalize_language(language)
        if path is not None and not isinstance(path, Iterable):
            logger.debug("Path is not a sequence of steps, using fallback term")
            return FALLBACK_TERMS[lang]
        status = getattr(path, "status", None)
        steps = list(path or [])

        if not steps:
            if status is PathStatus.UNREACHABLE:
                return FALLBACK_TERMS[lang]
            return SELF_TERMS[lang]

        canonical = [_canonical_step(step) for step in steps]
        if any(c is None for c in canonical):
            logger.debug("Unparseable step in path, using fallback term")
            return FALLBACK_TERMS[lang]

        for rule in self.rules:
            if rule.matches(canonical):
                return rule.term(lang)
        return FALLBACK_TERMS[lang]

    def resolve_bilingual(self, path: Optional[Iterable] = None) -> dict[str, KinshipTerm]:
        """Terms for every supported language, keyed by language code."""
        return {lang: self.resolve(path, lang) for lang in LANGUAGES}


default_resolver = KinshipTermResolver()


def resolve_kinship(
    persons,
    relationships,
    from_id,
    to_id,
    language: str = "en",
    resolver: Optional[KinshipTermResolver] = None,
) -> KinshipResult:
    """Find the shortest path between two persons and name it."""
    path = RelationshipGraphIndex(persons, relationships).find_path(from_id, to_id)
    kinship = (resolver or default_resolver).resolve(path, language)
    return KinshipResult(
        status=path.status,
        path=path,
        term=kinship.term,
        description=kinship.description,
        language=normalize_language(language),
    )
