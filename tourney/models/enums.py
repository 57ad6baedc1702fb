from enum import Enum


class UserRole(str, Enum):
    USER = "User"
    ADMIN = "Admin"


class TournamentStatus(str, Enum):
    UPCOMING = "Upcoming"
    LIVE = "Live"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class TransactionType(str, Enum):
    ENTRY_FEE = "Entry Fee"


class RequestType(str, Enum):
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"


class RequestStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DECLINED = "Declined"
