"""Error kinds raised while resolving options and running the request."""


class ReqlineError(Exception):
    """Base class for errors reported to the user as ``Error: <message>``."""


class InvalidArgument(ReqlineError):
    """Malformed URL, bad timeout or wrong number of positional arguments."""


class ConflictingOptions(ReqlineError):
    """More than one of --data, --json and --file was given."""


class FileAccessError(ReqlineError):
    """The --file body could not be read."""


class NetworkError(ReqlineError):
    """Connection failure, timeout or error while receiving the response."""


class MalformedFieldWarning(UserWarning):
    """A header, query or body value is malformed but processing continues."""
