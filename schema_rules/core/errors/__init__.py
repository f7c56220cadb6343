"""Monadic Error Handling

Usage:
    from schema_rules.core.errors import Ok, Err, require, validator_not_found

    match require(registry.resolve(User), validator_not_found("User").error):
        case Ok(validator):
            ...
        case Err(error):
            log.warning("validator_resolution_failed", **error.log_fields())
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    require,
)

from .builders import (
    resolution_error,
    resolver_missing,
    resolution_failed,
    validator_not_found,
    rule_error,
    rule_failed,
    include_traversal_failed,
    include_cycle,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "require",
    "resolution_error",
    "resolver_missing",
    "resolution_failed",
    "validator_not_found",
    "rule_error",
    "rule_failed",
    "include_traversal_failed",
    "include_cycle",
]
