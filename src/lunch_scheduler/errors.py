"""Error taxonomy for the lunch booking flow.

Only ``InvalidInputError`` escapes the pure parsing core. The other classes
are raised inside adapters and converted to result objects before they
reach the orchestrator.
"""


class LunchSchedulerError(Exception):
    """Base class for all lunch scheduler errors."""


class InvalidInputError(LunchSchedulerError, ValueError):
    """A required field is missing or malformed. Not retried."""


class LookupFailure(LunchSchedulerError):
    """A per-item directory or calendar lookup failed. Recovered locally."""


class ConfigurationError(LunchSchedulerError):
    """Credentials required by an enrichment step are not configured."""


class PersistenceError(LunchSchedulerError):
    """The booking record could not be written to the record store."""
