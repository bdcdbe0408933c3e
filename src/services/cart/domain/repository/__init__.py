from .cart_repository import CartRepository as CartRepository
