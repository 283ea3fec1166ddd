class UmpBotError(Exception):
    """Base error for failures reported to the caller with a status code."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingTaskError(UmpBotError):
    status_code = 400

    def __init__(self, message="Missing task payload."):
        super().__init__(message)


class DocumentRootNotFoundError(UmpBotError):
    def __init__(self, root):
        super().__init__(f"PDF root not found: {root}")
        self.root = root


class ConfigurationError(UmpBotError):
    pass


class UpstreamError(UmpBotError):
    """The completion service answered with a non-success status."""

    def __init__(self, upstream_status, body):
        super().__init__(f"UmpBot API error ({upstream_status}): {body}")
        self.upstream_status = upstream_status
        self.body = body
