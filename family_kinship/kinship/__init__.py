"""Kinship term resolution."""
from family_kinship.kinship.terms import KinshipTerm, KinshipRule, DEFAULT_RULES, EXTENDED_RULES
from family_kinship.kinship.resolver import KinshipTermResolver, resolve_kinship

__all__ = ["KinshipTerm", "KinshipRule", "DEFAULT_RULES", "EXTENDED_RULES", "KinshipTermResolver", "resolve_kinship"]
