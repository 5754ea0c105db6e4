from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import settings
from app.database import init_db
from app.routes import auth, trades, trading_plans, dashboard
import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if settings.STORAGE_BACKEND == "database":
    init_db()

app = FastAPI(title=settings.APP_NAME)

app.include_router(auth.router)
app.include_router(trades.router)
app.include_router(trading_plans.router)
app.include_router(dashboard.router)

INVALID_DATA_MESSAGES = {
    "/api/trades": "Invalid trade data",
    "/api/trading-plans": "Invalid plan data",
}


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "Invalid request"
    for prefix, text in INVALID_DATA_MESSAGES.items():
        if request.url.path.startswith(prefix):
            message = text
            break
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logging.info("Rejected %s %s: %d validation error(s)", request.method, request.url.path, len(errors))
    return JSONResponse({"message": message, "errors": errors}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logging.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"message": "Internal server error"}, status_code=500)


@app.get("/")
def root():
    return {"message": "Trading Journal API is running"}
