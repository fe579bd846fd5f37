"""Error taxonomy for the Yelix Cloud client."""


class YelixCloudError(RuntimeError):
    """Base error for Yelix Cloud client failures."""


class ConfigurationError(YelixCloudError, ValueError):
    """Missing credential or invalid setting at construction time."""


class InitializationFailedError(YelixCloudError):
    """The collector instance could not be created; delivery is refused."""


class QueueFullError(YelixCloudError):
    """The submission queue reached its size limit."""


class DeliveryError(YelixCloudError):
    """A transport raised while delivering a queued event."""
