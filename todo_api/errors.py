"""Errors raised while serving todo requests.

Each error carries the HTTP status code it is reported with at the request
boundary.
"""


class TodoError(Exception):
    status_code = 500


class InvalidDataError(TodoError):
    status_code = 400


class NotFoundError(TodoError):
    status_code = 404


class MethodNotAllowedError(TodoError):
    status_code = 405


class PersistenceError(TodoError):
    status_code = 500


class GuardTimeoutError(TodoError):
    status_code = 503
