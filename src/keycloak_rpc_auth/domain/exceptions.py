class ConfigurationError(ValueError):
    """Raised when the authenticator is constructed with invalid options."""
    pass


class AuthenticationError(Exception):
    """Raised when authentication fails."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or its signature does not verify."""
    pass


class IntrospectionError(AuthenticationError):
    """Raised when the introspection endpoint answers with an unusable body."""
    pass
