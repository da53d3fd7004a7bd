from .canonical import CANONICAL_FIELDS, CandidateProduct

__all__ = ["CANONICAL_FIELDS", "CandidateProduct"]
