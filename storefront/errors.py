# storefront/errors.py
# Domain errors. Each one knows the HTTP status it maps to and the fixed
# plain-text message sent back to the client.


class StoreError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, message=None, status_code=None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(StoreError):
    status_code = 400


class AuthenticationFailure(StoreError):
    status_code = 401


class NotFoundError(StoreError):
    status_code = 404
    message = "Item not found."


class AuthError(StoreError):
    """Auth gate rejections; rendered with an empty body."""
    message = ""


class MissingToken(AuthError):
    status_code = 401


class ForbiddenToken(AuthError):
    status_code = 403


class InvalidToken(Exception):
    """Raised by verify_token for a bad signature, malformed or expired token."""
