# models/stock.py
from sqlalchemy import BigInteger, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


class Stock(Base):
    __tablename__ = "stocks"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    symbol: Mapped[str] = mapped_column(String(20))
    company_name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    industry: Mapped[str] = mapped_column(String(100))
    market_cap: Mapped[int] = mapped_column(BigInteger, default=0)
    price: Mapped[float] = mapped_column(default=0.0)
    last_div: Mapped[float | None] = mapped_column(nullable=True)


# Symbols keep the casing they were sent with; "aapl" and "AAPL" are the same ticker.
Index("ux_stocks_symbol_upper", func.upper(Stock.symbol), unique=True)
