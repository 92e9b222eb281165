from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Organizations(Base):
    __tablename__ = 'organizations'

    name = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    activities = relationship('Activities', back_populates='organization')
    customers = relationship('Customers', back_populates='organization')
    reservations = relationship('Reservations', back_populates='organization')


class Activities(Base):
    __tablename__ = 'activities'
    __table_args__ = (
        CheckConstraint('duration_minutes > 0', name='ck_activities_duration'),
        CheckConstraint('min_party_size >= 1', name='ck_activities_min_party'),
        CheckConstraint('max_party_size >= min_party_size', name='ck_activities_max_party'),
    )

    organization_id = Column(ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    min_party_size = Column(Integer, nullable=False, server_default=text('1'))
    max_party_size = Column(Integer, nullable=False)
    capacity = Column(Integer)  # NULL = max_party_size
    price = Column(Float, nullable=False, server_default=text('0'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    # JSON: operating_days, open_time, close_time, slot_interval,
    # overrides, custom_dates, advance_booking_days
    schedule = Column(Text)
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    organization = relationship('Organizations', back_populates='activities')
    blocks = relationship('ActivityBlocks', back_populates='activity', order_by='ActivityBlocks.id')
    reservations = relationship('Reservations', back_populates='activity')


class ActivityBlocks(Base):
    __tablename__ = 'activity_blocks'
    __table_args__ = (
        Index('ix_activity_blocks_activity_date', 'activity_id', 'date'),
    )

    activity_id = Column(ForeignKey('activities.id', ondelete='CASCADE'), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Text)  # "HH:MM", NULL = whole day
    end_time = Column(Text)
    reason = Column(Text)
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    activity = relationship('Activities', back_populates='blocks')


class Customers(Base):
    __tablename__ = 'customers'
    __table_args__ = (
        UniqueConstraint('organization_id', 'email'),
    )

    organization_id = Column(ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False)
    email = Column(Text, nullable=False)  # trimmed + lower-cased
    id = Column(Integer, primary_key=True)
    full_name = Column(Text)
    phone = Column(Text)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    organization = relationship('Organizations', back_populates='customers')
    reservations = relationship('Reservations', back_populates='customer')


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        CheckConstraint('party_size >= 1', name='ck_reservations_party_size'),
        CheckConstraint('end_minute > start_minute', name='ck_reservations_interval'),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'checked-in', 'completed', 'cancelled', 'no-show')",
            name='ck_reservations_status',
        ),
        CheckConstraint(
            "payment_status IN ('pending', 'paid', 'partial', 'refunded')",
            name='ck_reservations_payment_status',
        ),
        Index('ix_reservations_activity_date', 'activity_id', 'date'),
        Index('ix_reservations_status_created', 'status', 'created_at'),
    )

    organization_id = Column(ForeignKey('organizations.id', ondelete='CASCADE'), nullable=False)
    activity_id = Column(ForeignKey('activities.id', ondelete='CASCADE'), nullable=False)
    customer_id = Column(ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    confirmation_code = Column(Text, nullable=False, unique=True)
    date = Column(Date, nullable=False)
    start_minute = Column(Integer, nullable=False)
    end_minute = Column(Integer, nullable=False)
    party_size = Column(Integer, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    payment_status = Column(Text, nullable=False, server_default=text("'pending'"))
    total_amount = Column(Float, nullable=False, server_default=text('0'))
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    id = Column(Integer, primary_key=True)
    notes = Column(Text)
    cancel_reason = Column(Text)

    organization = relationship('Organizations', back_populates='reservations')
    activity = relationship('Activities', back_populates='reservations')
    customer = relationship('Customers', back_populates='reservations')
