"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication errors."""


class InvalidCredentialsError(AuthError):
    """
    Email/password pair did not authenticate.

    Raised for both an unknown email and a wrong password so responses
    do not reveal which accounts exist.
    """

    def __init__(self, message: str = "These credentials do not match our records."):
        super().__init__(message)


class DuplicateIdentityError(AuthError):
    """A user with this email already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("The email has already been taken.")


class NotAuthenticatedError(AuthError):
    """No valid bearer token accompanied the request."""

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)
