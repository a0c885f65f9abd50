"""
Domain exceptions. Each carries the HTTP status the error handler in
``create_app`` answers with.
"""


class ClinicError(Exception):
    status_code = 500
    message = 'An error occurred'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ClinicError):
    status_code = 400
    message = 'Invalid request'


class PermissionDenied(ClinicError):
    status_code = 403
    message = 'Permission denied'


class NotFound(ClinicError):
    status_code = 404
    message = 'Not found'


class PrescriptionSaveError(ClinicError):
    """A store write failed part-way through saving a prescription."""
    status_code = 500
    message = 'Failed to save prescription'


class UpstreamError(ClinicError):
    status_code = 502
    message = 'Upstream service failed'


class UpstreamNotConfigured(UpstreamError):
    status_code = 503
    message = 'Upstream service is not configured'
