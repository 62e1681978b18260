from sqlalchemy import BigInteger, Column, Integer, String

from .base import Base


class Group(Base):
    __tablename__ = 'groups'
    id = Column(Integer, primary_key=True, autoincrement=True)
    version = Column(BigInteger, nullable=False, default=0)
    name = Column(String(255), nullable=False)

    __table_args__ = (
        {'sqlite_autoincrement': True},
    )
