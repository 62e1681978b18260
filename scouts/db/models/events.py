from sqlalchemy import BigInteger, Column, Date, ForeignKey, Index, Integer, String, Text

from .base import Base


class Event(Base):
    __tablename__ = 'events'
    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(BigInteger, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    meeting_point = Column(String(255), nullable=False, default='')
    location = Column(String(255), nullable=False)
    cost = Column(String(100), nullable=False, default='')
    additional_info = Column(Text, nullable=False, default='')

    __table_args__ = (
        {'sqlite_autoincrement': True},
    )


class EventGroup(Base):
    """Association between an event and a participating group."""
    __tablename__ = 'event_groups'
    event_id = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), primary_key=True)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), primary_key=True)

    __table_args__ = (
        Index('idx_event_groups_group_id', 'group_id'),
    )
