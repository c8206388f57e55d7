# Errors raised by the stores and turned into JSON responses by the blueprint


class ApiError(Exception):
    """Base error. ``error`` becomes the ``error`` field of the response body,
    any keyword arguments are added to the body as-is."""

    status_code = 500

    def __init__(self, error=None, **fields):
        super().__init__(error or self.__class__.__name__)
        self.error = error
        self.fields = fields

    def to_dict(self) -> dict:
        payload = dict(self.fields)
        if self.error is not None:
            payload['error'] = self.error
        return payload


class ValidationError(ApiError):
    status_code = 400


class MalformedRequest(ApiError):
    status_code = 400


class AuthError(ApiError):
    status_code = 403

    def __init__(self, error='Invalid credentials', **fields):
        super().__init__(error, **fields)


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500
