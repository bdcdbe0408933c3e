from .room_id import RoomId as RoomId
