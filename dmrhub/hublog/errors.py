class HubLogError(Exception):
    """Base exception for the categorized logging core."""
    pass


class UnknownCategoryError(HubLogError, ValueError):
    """A category with no registered sink policy was requested.

    Indicates a defect in the calling code, not a runtime fault.
    """
    pass


class LoggerClosedError(HubLogError, RuntimeError):
    """A line was submitted (or a logger requested) after shutdown."""
    pass


class QueueFullError(HubLogError):
    """Relay queue at capacity under the ``reject`` overflow policy."""
    pass
