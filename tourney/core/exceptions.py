"""
Domain errors raised by the service layer.

Every error carries a stable ``code`` (what the client branches on) and a
``message`` that is shown to the user verbatim. Endpoints translate these into
HTTP responses; services never raise ``HTTPException`` themselves.
"""


class WalletError(Exception):
    """Base class for wallet and tournament-entry failures"""
    code = "WalletError"
    default_message = "The operation could not be completed."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(WalletError):
    code = "NotFound"
    default_message = "User or Tournament data not found."


class InsufficientFundsError(WalletError):
    code = "InsufficientFunds"
    default_message = "Insufficient wallet balance."


class TournamentFullError(WalletError):
    code = "TournamentFull"
    default_message = "Tournament is full."


class AlreadyJoinedError(WalletError):
    code = "AlreadyJoined"
    default_message = "You have already joined this tournament."


class NotJoinableError(WalletError):
    code = "NotJoinable"
    default_message = "This tournament is not open for joining."


class TransactionConflictError(WalletError):
    """Raised when the store kept rejecting the transaction until attempts ran out"""
    code = "TransactionConflict"
    default_message = "The operation could not be completed due to concurrent updates. Please try again."


class InvalidRequestError(WalletError):
    code = "InvalidRequest"
    default_message = "Invalid request."


class DuplicateUserError(WalletError):
    code = "DuplicateUser"
    default_message = "User already exists."
