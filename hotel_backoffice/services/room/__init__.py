from hotel_backoffice.services.room.room_service import MANUAL_ROOM_STATUSES, RoomService

__all__ = ["MANUAL_ROOM_STATUSES", "RoomService"]
