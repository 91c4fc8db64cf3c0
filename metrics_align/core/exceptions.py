class MetricsAlignError(Exception):
    """Base class for errors raised by metrics_align."""


class InvalidMetricReference(MetricsAlignError):
    """A definition points at a metric that is not known."""


class DuplicateIdError(MetricsAlignError, ValueError):
    """Two records in the same collection share an id."""


class InvalidFilterValue(MetricsAlignError, ValueError):
    """A filter selector is neither 'all' nor a known enum value."""


class InvalidTranslationRequest(MetricsAlignError, ValueError):
    """A translation request names an unknown department or maps a department onto itself."""
