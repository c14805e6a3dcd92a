"""Error taxonomy shared by the GitHub and GitLab adapters."""


class AdapterError(Exception):
    """Base class carrying enough context for the dispatch layer to log a failure."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        operation: str | None = None,
        repository: str | None = None,
        issue_number: int | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.operation = operation
        self.repository = repository
        self.issue_number = issue_number
        self.status_code = status_code


class ConfigurationError(AdapterError):
    """A required setting (the API token) was missing when the adapter was built."""


class UpstreamTransportError(AdapterError):
    """The upstream call failed on the network or returned a non-2xx status."""


class MalformedResponseError(AdapterError):
    """The upstream answered 2xx but the body is not the expected JSON shape."""
