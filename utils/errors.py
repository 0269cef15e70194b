"""
Errors Module - Exceptions surfaced to API clients as {"error": message}
"""


class PortfolioError(Exception):
    """Base class; status_code is the HTTP status used at the boundary"""
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(PortfolioError):
    status_code = 400
    default_message = 'Invalid request'


class AuthError(PortfolioError):
    status_code = 401
    default_message = 'Unauthorized. Please login.'


class NotFoundError(PortfolioError):
    status_code = 404
    default_message = 'Not found'


class StorageError(PortfolioError):
    status_code = 500
    default_message = 'Storage failure'


__all__ = [
    'PortfolioError',
    'ValidationError',
    'AuthError',
    'NotFoundError',
    'StorageError'
]
