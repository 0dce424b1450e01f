"""
Shared SQLAlchemy base and helpers.
"""
from sqlalchemy import Numeric
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


# Monetary amounts (prices, forecasts, costs)
Money = Numeric(14, 2, asdecimal=True)

Base = declarative_base()
