from .repository import CartRepository as CartRepository
from .value_object import CartLine as CartLine
from .value_object import CartSnapshot as CartSnapshot
