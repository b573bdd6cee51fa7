"""Error taxonomy for role and assignment mutations.

Authorization predicates never raise; only the store-facing services do.
"""
from __future__ import annotations


class AuthzError(Exception):
    """Base error for expected failures."""

    http_status = 400
    title = 'Bad Request'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(AuthzError):
    http_status = 404
    title = 'Not Found'

    def __init__(self, message: str = 'not found'):
        super().__init__(message)


class Conflict(AuthzError):
    http_status = 409
    title = 'Conflict'

    def __init__(self, message: str = 'conflict'):
        super().__init__(message)


class InvalidArgument(AuthzError):
    http_status = 400
    title = 'Bad Request'

    def __init__(self, message: str = 'invalid argument'):
        super().__init__(message)


__all__ = ['AuthzError', 'NotFound', 'Conflict', 'InvalidArgument']
