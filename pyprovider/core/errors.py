class PyProviderError(Exception):
    """Base class for errors raised by pyprovider."""


class UsageError(PyProviderError):
    """A component was composed incorrectly (e.g. a Consumer with no Provider above it).

    This is a programming error in the component tree; it is never retried or
    recovered internally.
    """
