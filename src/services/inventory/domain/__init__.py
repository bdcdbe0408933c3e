from .entity import Room as Room
from .exception import RoomInUseException as RoomInUseException
from .exception import RoomNotFoundException as RoomNotFoundException
from .repository import RoomRepository as RoomRepository
from .value_object import RoomId as RoomId
