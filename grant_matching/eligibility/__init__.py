"""Eligibility classification of company activity codes."""

from .cnae import CnaeMatch, CnaeTier, cnae_division, match_cnae

__all__ = ["CnaeMatch", "CnaeTier", "cnae_division", "match_cnae"]
