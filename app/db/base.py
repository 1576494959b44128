"""
base.py

SQLAlchemy declarative Base.

Every model (User, Publication, Thesis, MasterSI, Actu, Hero, CarouselItem,
PresentationContent) inherits from this Base, and Alembic reads its
metadata for migrations.

Related files:
- app.models.*            : ORM models
- alembic/env.py          : migration metadata

"""

from sqlalchemy.orm import declarative_base

# shared by every ORM model
Base = declarative_base()
