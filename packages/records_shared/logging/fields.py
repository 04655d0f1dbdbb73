"""Canonical structured logging field names."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"

# Record lifecycle fields.
RECORD_ID = "record_id"
RECORD_NAME = "record_name"
COUNT = "count"
REASON = "reason"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
