from fastapi import FastAPI, Request
from dotenv import load_dotenv

load_dotenv()
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from database import Base, engine
from datetime import datetime
import os
import models  # noqa: F401  (registers every table on Base.metadata)
import routers.ledgers as ledgers
import routers.vouchers as vouchers
import routers.invoices as invoices
import routers.transactions as transactions
import routers.reports as reports
from exceptions import (
    DuplicateNumberError,
    ImbalancedVoucherError,
    InvalidVoucherError,
    LedgerEngineError,
    MissingReferenceError,
    StorageFailure,
)
import logging
from fastapi.openapi.utils import get_openapi


LOG_DIR = os.getenv("LOG_DIR", "logs")
os.makedirs(LOG_DIR, exist_ok=True) # Create the log directory if it doesn't exist

# Create a unique log file name based on current date/time
current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
LOG_FILE = os.path.join(LOG_DIR, f"app_{current_time_str}.log")

# Configure the root logger
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE,
    filemode='a'
)

# Also log to the console
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logging.getLogger().addHandler(console_handler)

logger = logging.getLogger(__name__)
logger.info("Application starting up...")
# --- End Logging Configuration ---


# Create database tables (migrations own the schema when this is off)
if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
    Base.metadata.create_all(bind=engine)


app = FastAPI()


allowed_origins_str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173"
)

# Split the string into a list, stripping any whitespace
allowed_origins = [origin.strip() for origin in allowed_origins_str.split(',')]

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, exc: LedgerEngineError, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "code": exc.code, **extra})


@app.exception_handler(ImbalancedVoucherError)
async def imbalanced_voucher_handler(request: Request, exc: ImbalancedVoucherError):
    return _error_response(400, exc, total_debit=str(exc.total_debit), total_credit=str(exc.total_credit))


@app.exception_handler(InvalidVoucherError)
async def invalid_voucher_handler(request: Request, exc: InvalidVoucherError):
    return _error_response(400, exc)


@app.exception_handler(DuplicateNumberError)
async def duplicate_number_handler(request: Request, exc: DuplicateNumberError):
    logger.warning(f"Duplicate number on {request.url.path}: {exc.number}")
    return _error_response(400, exc, number=exc.number)


@app.exception_handler(MissingReferenceError)
async def missing_reference_handler(request: Request, exc: MissingReferenceError):
    return _error_response(400, exc, entity=exc.entity, reference_id=exc.reference_id)


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "The operation could not be saved.", "code": exc.code})


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Ledger & Invoicing API",
        version="1.0.0",
        description="Vouchers, ledgers, GST invoices and the transactions and stock they drive",
        routes=app.routes,
    )
    openapi_schema["components"]["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    # Apply security globally to all endpoints
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


app.include_router(ledgers.router)
app.include_router(vouchers.router)
app.include_router(invoices.router)
app.include_router(transactions.router)
app.include_router(reports.router)


@app.get("/")
async def test_route():
    return {"message": "Welcome to the FastAPI application!"}
