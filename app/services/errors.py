"""
Service-layer errors

Services raise these; blueprints turn them into JSON responses using
status_code and to_dict().
"""


class LedgerError(Exception):
    """Base class for errors reported synchronously to the caller"""
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class NotFoundError(LedgerError):
    """Job, user or related record does not exist"""
    status_code = 404


class ForbiddenError(LedgerError):
    """Requester does not own the resource or lacks the role"""
    status_code = 403


class InvalidStateError(LedgerError):
    """Operation not allowed in the record's current state"""
    status_code = 400


class ValidationError(LedgerError):
    """Malformed or out-of-range input"""
    status_code = 400


class InsufficientFundsError(LedgerError):
    """Ad balance is lower than the amount to debit"""
    status_code = 400

    def __init__(self, required, current, message="Insufficient balance"):
        super().__init__(message)
        self.required = required
        self.current = current

    def to_dict(self):
        return {
            'error': self.message,
            'required': float(self.required),
            'current': float(self.current)
        }
