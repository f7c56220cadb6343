"""Declarative Validation Metadata

Validators declare per-property constraints and include other validators.
The schema rules read this metadata; nothing here validates data.
"""
from .constraints import (
    ConstraintKind,
    LengthMode,
    ComparisonOperator,
    Constraint,
    NotNull,
    NotEmpty,
    Length,
    RegexPattern,
    Compare,
    Between,
    Email,
    Custom,
    is_numeric,
)

from .validators import (
    PropertyRule,
    IncludeRule,
    Validator,
    ValidatorResolver,
    ValidatorRegistry,
)
