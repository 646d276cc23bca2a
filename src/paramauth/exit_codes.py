"""Numeric process exit codes for the ``paramauth`` command line.

Each constant maps to an error category and is referenced by the
corresponding :class:`~paramauth.exceptions.ParamAuthError` subclass, so
shell wrappers can tell a missing configuration from an upstream outage
without parsing stderr.

Example::

    $ paramauth token blackboard
    $ echo $?
    4   # EXIT_CONFIG_MISSING -- no secrets stored for the key
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid arguments, an empty credential key, or an unknown strategy."""

EXIT_UPSTREAM_INVALID = 3
"""The token endpoint answered without a usable token."""

EXIT_CONFIG_MISSING = 4
"""No secrets are stored for the requested key and strategy."""

EXIT_CONFIG_MALFORMED = 5
"""Stored secrets exist but do not have the expected shape."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred talking to the token endpoint."""

EXIT_STORE_UNAVAILABLE = 7
"""The secret store could not be reached or refused the request."""
