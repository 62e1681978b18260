from sqlalchemy import BigInteger, Column, Date, ForeignKey, Index, Integer, String, Text

from .base import Base


class Scout(Base):
    __tablename__ = 'scouts'
    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(BigInteger, nullable=False, default=0)
    name = Column(String(255), nullable=False)
    # name.casefold(), written with every insert and update
    name_search = Column(Text, nullable=False)
    birth_date = Column(Date, nullable=False)
    address = Column(String(500), nullable=False)
    phone_number = Column(String(50), nullable=False, default='')
    health_insurance = Column(String(255), nullable=False)
    allergy_info = Column(Text, nullable=False, default='')
    vaccination_info = Column(Text, nullable=False, default='')
    last_updated = Column(Date, nullable=False)

    __table_args__ = (
        Index('idx_scouts_name', 'name'),
        Index('idx_scouts_name_search', 'name_search'),
        {'sqlite_autoincrement': True},
    )


class ScoutContact(Base):
    """Owned contact row; ``contact_order`` is the position within the scout."""
    __tablename__ = 'scout_contacts'
    scout_id = Column(Integer, ForeignKey('scouts.id', ondelete='CASCADE'), primary_key=True)
    contact_order = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    relationship = Column(String(100), nullable=False)


class ScoutGroup(Base):
    """Association between a scout and a group it belongs to."""
    __tablename__ = 'scout_groups'
    scout_id = Column(Integer, ForeignKey('scouts.id', ondelete='CASCADE'), primary_key=True)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), primary_key=True)

    __table_args__ = (
        Index('idx_scout_groups_group_id', 'group_id'),
    )
