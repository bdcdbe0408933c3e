from .cart_line import CartLine as CartLine
from .cart_snapshot import CartSnapshot as CartSnapshot
