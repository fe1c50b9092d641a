"""
Error types for the queue manager
"""


class QueueManagerError(RuntimeError):
    """Base class for queue manager errors"""
    pass


class CatalogLoadError(QueueManagerError):
    """The song catalog could not be fetched or returned a non-success status"""
    pass


class CatalogFormatError(CatalogLoadError):
    """The song catalog was fetched but its contents are malformed"""
    pass
