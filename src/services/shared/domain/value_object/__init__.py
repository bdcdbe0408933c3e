from .currency import Currency as Currency
from .money import Money as Money
from .requester import Requester as Requester
from .user_id import UserId as UserId
