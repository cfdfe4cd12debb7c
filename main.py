# main.py
import os
if os.getenv("DEBUGPY", "0") == "1":
    import debugpy
    debugpy.listen(("0.0.0.0", 5678))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from config.logging_config import configure_logging
from middleware.error_handlers import register_exception_handlers
from middleware.rate_limit import limiter
from middleware.request_logging import RequestLoggingMiddleware
from routers.account_routes import router as account_router
from routers.comment_routes import router as comment_router
from routers.portfolio_routes import router as portfolio_router
from routers.stock_routes import router as stock_router

configure_logging()

app = FastAPI(title="Stock Portfolio API")

app.state.limiter = limiter
register_exception_handlers(app)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(account_router, prefix="/account", tags=["account"])
app.include_router(stock_router, prefix="/stock", tags=["stock"])
app.include_router(comment_router, prefix="/comment", tags=["comment"])
app.include_router(portfolio_router, prefix="/portfolio", tags=["portfolio"])

# db startup; production schemas are managed by alembic
from database import Base, engine
import models  # this triggers models/__init__.py which imports all tables

Base.metadata.create_all(bind=engine)
