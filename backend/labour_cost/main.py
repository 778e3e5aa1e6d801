from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from labour_cost.config import settings
from labour_cost.logging_config import configure_logging
from labour_cost.routers import calculate, forecast, health, reference_data

configure_logging(settings.log_level)

app = FastAPI(
    title="Labour Cost Interpreter API",
    description="Award-based shift costing and labour cost forecasting",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(reference_data.router)
app.include_router(calculate.router)
app.include_router(forecast.router)
