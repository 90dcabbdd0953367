"""Exception types raised by localspy."""


class LocalspyError(Exception):
    """Base class for all localspy errors."""


class ConfigurationError(LocalspyError):
    """The review configuration is missing or malformed.

    Fatal: raised before any review work starts.
    """


class ModelUnavailableError(LocalspyError):
    """The configured model is not installed and could not be fetched.

    Fatal: no file can be reviewed without a model.
    """


class BackendError(LocalspyError):
    """A call to the model backend failed (connection, HTTP status, timeout)."""
