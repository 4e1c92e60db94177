"""
Custom exception hierarchy for the relationship resolver.

Everything raised on purpose inherits from ResolverError so the entry
point can tell our failures apart from unexpected ones in the logs.
"""


class ResolverError(Exception):
    """Base exception for all resolver errors."""

    def __init__(self, message: str, component: str = "unknown"):
        self.component = component
        super().__init__(f"[{component}] {message}")


class SearchError(ResolverError):
    """A search page came back with a non-success status."""

    def __init__(self, protocol: str, status_code: int, body: str = ""):
        self.protocol = protocol
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"{protocol} search failed: {status_code} {body}".rstrip(),
            component="search",
        )


class SearchProtocolUnavailable(ResolverError):
    """The enhanced search endpoint does not exist on this site."""

    def __init__(self, message: str = "enhanced JQL search not available"):
        super().__init__(message, component="search")
