"""
Shared SQLAlchemy base.
"""
from sqlalchemy.orm import declarative_base


Base = declarative_base()
