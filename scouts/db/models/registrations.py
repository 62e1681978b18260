from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text

from .base import Base


class Registration(Base):
    __tablename__ = 'registrations'
    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(BigInteger, nullable=False, default=0)
    scout_id = Column(Integer, ForeignKey('scouts.id', ondelete='CASCADE'), nullable=False)
    event_id = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    note = Column(Text, nullable=False, default='')
    status = Column(String(20), nullable=False, default='PENDING')
    registration_date = Column(DateTime(timezone=True), nullable=False)
    account_id = Column(String(255), nullable=False)

    __table_args__ = (
        Index('idx_registrations_scout_id', 'scout_id'),
        Index('idx_registrations_event_id', 'event_id'),
        CheckConstraint("status in ('PENDING','CONFIRMED','CANCELLED')", name='ck_registrations_status'),
        {'sqlite_autoincrement': True},
    )
