"""Authentication exceptions.

These exceptions are raised by the juander_auth package and should be
caught and handled by the application and presentation layers.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a session token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Also used for locked accounts, so callers cannot tell an unknown
    email, a wrong password and a lockout apart.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class InvalidCodeError(AuthError):
    """Raised when a one-time code is missing, wrong, expired or used up."""

    def __init__(self, message: str = "Invalid or expired code"):
        super().__init__(message)


class FederationVerificationError(AuthError):
    """Raised when a third-party identity token cannot be verified."""

    def __init__(self, message: str = "Google login failed"):
        super().__init__(message)
