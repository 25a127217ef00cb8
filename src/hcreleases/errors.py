class ReleasesError(Exception):
    """Base class for errors raised by the releases client."""


class APIError(ReleasesError):
    """The API answered with a non-200 status and a {code, message} body."""

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(f"error: {message}; status code: {status_code}")


class UnknownAPIError(APIError):
    """The API answered with a non-200 status and a body that could not be decoded."""

    def __init__(self, status_code: int):
        self.message = ""
        self.status_code = status_code
        ReleasesError.__init__(self, f"unknown error, status code: {status_code}")


class ResponseDecodeError(ReleasesError):
    """A 200 response whose body is not the expected JSON."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"error decoding response body: {cause}")
