from tourney.core.database import Base

# Import all models here to ensure they are registered with Base.
# Tables are created by tourney.core.database.init_db on application startup.
from .user import User
from .tournament import Tournament
from .participant import Participant
from .transaction import Transaction
from .request import Request
