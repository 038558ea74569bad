from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn
from order_service.api.routes import router
from order_service.core.config import settings
from order_service.core.errors import OrderServiceError
from order_service.data.database import engine, init_db
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up...")
    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()

app = FastAPI(title="Order Management Service", lifespan=lifespan)

@app.exception_handler(OrderServiceError)
async def order_service_exception_handler(request: Request, exc: OrderServiceError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Global exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": str(exc)},
    )

app.include_router(router)

@app.get("/")
async def root():
    return {"message": "Order Management Service is running"}

if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
