"""Domain-Specific Error Builders

Ergonomic constructors for the annotation failure taxonomy.
Each builder creates AppError with appropriate code and context.
"""
from .types import AppError, ErrorCode, Err


# =============================================================================
# Resolution Errors (E1xxx)
# =============================================================================

def resolution_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1000_RESOLUTION_GENERIC,
    model: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create validator resolution error."""
    meta = {"model": model, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def resolver_missing(origin: str = "") -> Err[AppError]:
    return resolution_error(
        "Validator resolver is not provided. Register validators before generating schemas.",
        code=ErrorCode.E1001_RESOLVER_MISSING,
        origin=origin,
    )


def resolution_failed(model: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return resolution_error(
        f"Resolving validator for type '{model}' failed: {cause}",
        code=ErrorCode.E1002_RESOLVER_FAILED,
        model=model,
        origin=origin,
        cause=cause,
    )


def validator_not_found(model: str, origin: str = "") -> Err[AppError]:
    return resolution_error(
        f"No validator registered for type '{model}'",
        code=ErrorCode.E1003_VALIDATOR_NOT_FOUND,
        model=model,
        origin=origin,
    )


# =============================================================================
# Rule Errors (E2xxx)
# =============================================================================

def rule_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_RULE_GENERIC,
    model: str | None = None,
    rule: str | None = None,
    property_name: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create rule application error."""
    meta = {"model": model, "rule": rule, "property": property_name, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def rule_failed(rule: str, model: str, property_name: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return rule_error(
        f"Error on apply rule '{rule}' for property '{model}.{property_name}': {cause}",
        code=ErrorCode.E2001_RULE_APPLY_FAILED,
        model=model,
        rule=rule,
        property_name=property_name,
        origin=origin,
        cause=cause,
    )


def include_traversal_failed(model: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return rule_error(
        f"Applying included validator rules for type '{model}' failed: {cause}",
        code=ErrorCode.E2010_INCLUDE_TRAVERSAL_FAILED,
        model=model,
        origin=origin,
        cause=cause,
    )


def include_cycle(model: str, validator: str, origin: str = "") -> Err[AppError]:
    return rule_error(
        f"Validator '{validator}' is included more than once while annotating '{model}'; skipping",
        code=ErrorCode.E2011_INCLUDE_CYCLE,
        model=model,
        origin=origin,
        validator=validator,
    )
