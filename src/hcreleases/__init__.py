from .client import ReleasesClient, encode_release_options
from .errors import APIError, ReleasesError, ResponseDecodeError, UnknownAPIError
from .models import Build, Release, ReleaseOptions, Status

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "Build",
    "Release",
    "ReleaseOptions",
    "ReleasesClient",
    "ReleasesError",
    "ResponseDecodeError",
    "Status",
    "UnknownAPIError",
    "encode_release_options",
]
