# hotel_backoffice/repositories/booking_repository.py
"""
Booking repository.

Holds the overlap query that every availability decision is based on. Two
stays ``[a_in, a_out)`` and ``[b_in, b_out)`` overlap exactly when
``a_in < b_out AND b_in < a_out``; only confirmed and checked-in bookings
take part.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, exists, func, select
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.sql.elements import ColumnElement

from hotel_backoffice.models.booking import Booking
from hotel_backoffice.models.enums import BookingStatus
from hotel_backoffice.models.room import Room, RoomType
from hotel_backoffice.models.service import BookingServiceLine
from hotel_backoffice.repositories.base_repository import BaseRepository


class BookingSearchCriteria:
    """Filters for booking listings."""

    def __init__(
        self,
        status: Optional[BookingStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        customer_id: Optional[UUID] = None,
        room_id: Optional[UUID] = None,
    ):
        self.status = status
        self.date_from = date_from
        self.date_to = date_to
        self.customer_id = customer_id
        self.room_id = room_id


class CustomerBookingStatistics:
    """Booking totals for one customer."""

    def __init__(self):
        self.total_bookings: int = 0
        self.total_spent: Decimal = Decimal("0.00")
        self.last_booking: Optional[Booking] = None
        self.favorite_room_type: Optional[str] = None


class BookingRepository(BaseRepository[Booking]):
    """
    Repository for booking operations.

    Provides:
    - Overlap detection against active bookings
    - Filtered listings and detail loading
    - Status writes and service line items
    """

    def __init__(self, session: Session):
        super().__init__(Booking, session)

    # ==================== AVAILABILITY & CONFLICTS ====================

    @staticmethod
    def _active_overlap(
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> ColumnElement[bool]:
        conditions = [
            Booking.room_id == room_id,
            Booking.status.in_(BookingStatus.active()),
            Booking.overlaps(check_in_date, check_out_date),
        ]
        if exclude_booking_id is not None:
            conditions.append(Booking.id != exclude_booking_id)
        return and_(*conditions)

    def has_conflict(
        self,
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> bool:
        """
        Check whether any active booking of the room overlaps the range.

        Args:
            room_id: Room UUID
            check_in_date: First night of the candidate stay
            check_out_date: Departure day of the candidate stay (exclusive)
            exclude_booking_id: Booking to ignore (when editing it)

        Returns:
            True if at least one active booking overlaps
        """
        query = select(
            exists().where(
                self._active_overlap(room_id, check_in_date, check_out_date, exclude_booking_id)
            )
        )
        with self.storage_errors("has_conflict"):
            return bool(self.session.execute(query).scalar())

    def find_conflicting_bookings(
        self,
        room_id: UUID,
        check_in_date: date,
        check_out_date: date,
        exclude_booking_id: Optional[UUID] = None,
    ) -> List[Booking]:
        """Active bookings of the room overlapping the range, earliest first."""
        query = (
            select(Booking)
            .where(self._active_overlap(room_id, check_in_date, check_out_date, exclude_booking_id))
            .order_by(Booking.check_in_date)
        )
        with self.storage_errors("find_conflicting_bookings"):
            return list(self.session.execute(query).scalars().all())

    def booked_room_ids(self, check_in_date: date, check_out_date: date):
        """Subquery of rooms held by an active booking overlapping the range."""
        return (
            select(Booking.room_id)
            .where(
                Booking.status.in_(BookingStatus.active()),
                Booking.overlaps(check_in_date, check_out_date),
            )
            .distinct()
        )

    # ==================== SEARCH & RETRIEVAL ====================

    def search_bookings(self, criteria: BookingSearchCriteria) -> List[Booking]:
        """Bookings matching the criteria, newest first."""
        query = select(Booking).options(
            joinedload(Booking.room),
            joinedload(Booking.customer),
        )

        if criteria.status is not None:
            query = query.where(Booking.status == criteria.status)
        if criteria.date_from is not None:
            query = query.where(Booking.check_in_date >= criteria.date_from)
        if criteria.date_to is not None:
            query = query.where(Booking.check_out_date <= criteria.date_to)
        if criteria.customer_id is not None:
            query = query.where(Booking.customer_id == criteria.customer_id)
        if criteria.room_id is not None:
            query = query.where(Booking.room_id == criteria.room_id)

        query = query.order_by(Booking.created_at.desc())

        with self.storage_errors("search_bookings"):
            return list(self.session.execute(query).scalars().unique().all())

    def get_detail(self, booking_id: UUID) -> Optional[Booking]:
        query = (
            select(Booking)
            .where(Booking.id == booking_id)
            .options(
                joinedload(Booking.room),
                joinedload(Booking.customer),
                selectinload(Booking.service_lines).joinedload(BookingServiceLine.service),
            )
            .execution_options(populate_existing=True)
        )
        with self.storage_errors("get_detail"):
            return self.session.execute(query).scalars().unique().one_or_none()

    def count_for_customer(self, customer_id: UUID) -> int:
        query = select(func.count(Booking.id)).where(Booking.customer_id == customer_id)
        with self.storage_errors("count_for_customer"):
            return self.session.execute(query).scalar_one()

    def history_for_customer(self, customer_id: UUID) -> List[Booking]:
        """All bookings of a customer with room and room type, newest first."""
        query = (
            select(Booking)
            .where(Booking.customer_id == customer_id)
            .options(joinedload(Booking.room).joinedload(Room.room_type))
            .order_by(Booking.created_at.desc())
        )
        with self.storage_errors("history_for_customer"):
            return list(self.session.execute(query).scalars().unique().all())

    def get_customer_statistics(self, customer_id: UUID) -> CustomerBookingStatistics:
        """
        Booking totals for a customer.

        Every booking counts towards ``total_bookings``; cancelled ones are
        left out of the amount spent and of the favourite room type.
        """
        stats = CustomerBookingStatistics()
        kept = and_(
            Booking.customer_id == customer_id,
            Booking.status != BookingStatus.CANCELLED,
        )

        with self.storage_errors("get_customer_statistics"):
            stats.total_bookings = self.count_for_customer(customer_id)
            if stats.total_bookings == 0:
                return stats

            spent = self.session.execute(
                select(func.sum(Booking.total_amount)).where(kept)
            ).scalar_one()
            stats.total_spent = Decimal(str(spent or 0)).quantize(Decimal("0.01"))

            stats.last_booking = self.session.execute(
                select(Booking)
                .where(Booking.customer_id == customer_id)
                .order_by(Booking.created_at.desc())
                .limit(1)
            ).scalars().first()

            favorite = self.session.execute(
                select(RoomType.name)
                .join(Room, Room.room_type_id == RoomType.id)
                .join(Booking, Booking.room_id == Room.id)
                .where(kept)
                .group_by(RoomType.id, RoomType.name)
                .order_by(func.count(Booking.id).desc(), RoomType.name)
                .limit(1)
            ).scalar_one_or_none()
            stats.favorite_room_type = favorite

        return stats

    # ==================== WRITES ====================

    def set_status(self, booking: Booking, status: BookingStatus) -> Booking:
        return self.update(booking, status=status)

    def add_service_line(self, line: BookingServiceLine) -> BookingServiceLine:
        with self.storage_errors("add_service_line"):
            self.session.add(line)
            self.session.flush()
        return line
