import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship

from .database import Base

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def utcnow():
    """Naive UTC timestamp with microsecond resolution"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_id():
    """Generate a UUID primary key, matching the ids issued by the hosted backend"""
    return str(uuid.uuid4())


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(500), nullable=False, default="")
    price = Column(Float, nullable=False)  # Base price for a 4-hour rental
    category = Column(String(50), nullable=False, default="standard")
    features = Column(JSON, default=list, nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    # Natural dedup key for the booking upsert
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # One live booking per slot; cancelled bookings free the slot
        Index(
            "uq_bookings_slot",
            "product_id",
            "event_date",
            "event_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_id = Column(
        String(36), ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    product_id = Column(
        String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=False)
    duration = Column(Integer, nullable=False, default=4)  # Hours
    address = Column(String(500), nullable=False)
    event_type = Column(String(100), nullable=False)
    guests_count = Column(Integer, nullable=True)
    special_requests = Column(Text, nullable=True)
    total_price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    deposit_paid = Column(Boolean, default=False, nullable=False)
    full_payment_paid = Column(Boolean, default=False, nullable=False)
    deposit_amount = Column(Float, default=0, nullable=False)
    paid_amount = Column(Float, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Many-to-one only: deleting a referenced customer or product must reach the
    # store's foreign key instead of being nullified by the ORM
    customer = relationship("Customer", lazy="joined")
    product = relationship("Product", lazy="joined")


class GalleryImage(Base):
    __tablename__ = "gallery"

    id = Column(String(36), primary_key=True, default=generate_id)
    image_url = Column(String(500), nullable=False)
    caption = Column(String(255), nullable=False, default="Photo")
    is_public = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    tag_links = relationship(
        "GalleryImageTag", back_populates="image", cascade="all, delete-orphan"
    )

    @property
    def tags(self) -> list["GalleryTag"]:
        return [link.tag for link in self.tag_links]


class GalleryTag(Base):
    __tablename__ = "gallery_tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), unique=True, nullable=False)
    color = Column(String(7), nullable=False, default="#6366f1")
    created_at = Column(DateTime, default=utcnow, nullable=False)

    image_links = relationship(
        "GalleryImageTag", back_populates="tag", cascade="all, delete-orphan"
    )


class GalleryImageTag(Base):
    __tablename__ = "gallery_image_tags"
    __table_args__ = (UniqueConstraint("image_id", "tag_id", name="uq_gallery_image_tag"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    image_id = Column(String(36), ForeignKey("gallery.id", ondelete="CASCADE"), nullable=False)
    tag_id = Column(String(36), ForeignKey("gallery_tags.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    image = relationship("GalleryImage", back_populates="tag_links")
    tag = relationship("GalleryTag", back_populates="image_links")


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="new", index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class UserProfile(Base):
    """Back-office account. The id is the user id issued by the hosted auth service."""

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="admin")
    created_at = Column(DateTime, default=utcnow, nullable=False)
