# Analyzer package - brand audit engine
from .extractor import extract_structured_content
from .stages import InferenceStages
from .pipeline import BrandAuditor, AuditError, AuditInputError, AuditFailedError

__all__ = [
    "extract_structured_content",
    "InferenceStages",
    "BrandAuditor",
    "AuditError",
    "AuditInputError",
    "AuditFailedError",
]
