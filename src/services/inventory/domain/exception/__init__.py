from .inventory_exceptions import RoomInUseException as RoomInUseException
from .inventory_exceptions import RoomNotFoundException as RoomNotFoundException
