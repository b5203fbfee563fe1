"""Error Handling

Result[T, E] for boundary code, AppError with a typed ErrorCode, and
builders for the error codes the validator and its CLI produce.

Usage:
    from core.errors import Ok, Err, Result, AppError

    match parse_ingress(payload, rules):
        case Ok(data):
            save(data)
        case Err(error):
            respond(error.code.http_status, error.to_dict())
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
    try_result,
)

from .builders import (
    validation_error,
    file_not_found,
    file_read_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "try_result",
    "validation_error",
    "file_not_found",
    "file_read_error",
]
