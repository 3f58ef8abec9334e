"""Error taxonomy shared by the store, the view layer and the HTTP routes."""


class TaskgraphError(Exception):
    """Base class for request-level failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskgraphError):
    """A required field is missing or a field has an invalid value."""


class NotFoundError(TaskgraphError):
    """Unknown entity id or unknown edge."""


class UnsupportedFormatError(TaskgraphError):
    """Negotiation cannot satisfy an explicit format requirement.

    ``request_body`` distinguishes an unreadable request Content-Type from an
    Accept header that rules out every encoding we can produce.
    """

    def __init__(self, media_type: str, *, request_body: bool = False) -> None:
        if request_body:
            message = f"Unsupported content type: {media_type}"
        else:
            message = f"Cannot produce any of the accepted formats: {media_type}"
        super().__init__(message)
        self.media_type = media_type
        self.request_body = request_body
