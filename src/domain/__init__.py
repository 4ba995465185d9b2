"""Domain layer: errors, schemas, constants."""

from .errors import ActionError, ErrorCodes, FlowError, GuardianError, InputValidationError
from .schemas import (
    ApkAnalysisRequest,
    ApkAnalysisResult,
    ApkMetadataInput,
    ApkSourceInput,
    ScanLog,
    UrlAnalysisRequest,
    UrlAnalysisResult,
)

__all__ = [
    "GuardianError",
    "FlowError",
    "ActionError",
    "InputValidationError",
    "ErrorCodes",
    "UrlAnalysisRequest",
    "UrlAnalysisResult",
    "ApkAnalysisRequest",
    "ApkAnalysisResult",
    "ApkMetadataInput",
    "ApkSourceInput",
    "ScanLog",
]
