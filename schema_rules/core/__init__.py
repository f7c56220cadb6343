# Core module exports
from schema_rules.core.config import Settings, get_settings
from schema_rules.core.logging import (
    configure_logging,
    get_logger,
    null_logger,
    annotator_logger,
    integration_logger,
)
