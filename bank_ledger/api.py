"""
FastAPI REST API Module

Exposes the ledger over HTTP. Ledger errors are translated into
{"error": "<message>"} payloads; undo on an empty stack is informational.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from . import __version__
from .config import LedgerConfig, get_config
from .errors import AccountNotFound
from .ledger import Ledger, seed_demo_data
from .logging_config import setup_logging, get_logger, log_action
from .money import parse_amount
from .schemas import AmountRequest, CreateAccountRequest


logger = get_logger("bank_ledger.api")

router = APIRouter()


# Dependency to get the ledger bound to the running app
def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


@router.get("/accounts")
async def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """List all accounts sorted by account number"""
    return [account.to_dict() for account in ledger.get_all_accounts()]


@router.post("/accounts", status_code=status.HTTP_201_CREATED)
async def create_account(
    request: CreateAccountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Open a new account"""
    account = ledger.create_account(
        owner_name=request.owner_name,
        email=request.email,
        initial_deposit=parse_amount(request.balance),
        category=request.type
    )
    log_action(
        logger, "info", "Account created",
        action="create_account", resource=account.account_number,
        extra={"type": account.category.value, "balance": str(account.balance)}
    )
    return account.to_dict()


@router.get("/accounts/{account_number}")
async def get_account(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Get account details"""
    account = ledger.get_account(account_number)
    if account is None:
        raise AccountNotFound(account_number)
    return account.to_dict()


@router.post("/accounts/{account_number}/deposit")
async def deposit(
    account_number: str,
    request: AmountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Deposit into an account and return the updated account"""
    transaction = ledger.deposit(account_number, parse_amount(request.amount), request.note or "Deposit")
    log_action(
        logger, "info", "Deposit posted",
        action="deposit", resource=account_number,
        extra={"transaction_id": transaction.id, "amount": str(transaction.amount)}
    )
    return ledger.get_account(account_number).to_dict()


@router.post("/accounts/{account_number}/withdraw")
async def withdraw(
    account_number: str,
    request: AmountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Withdraw from an account and return the updated account"""
    transaction = ledger.withdraw(account_number, parse_amount(request.amount), request.note or "Withdrawal")
    log_action(
        logger, "info", "Withdrawal posted",
        action="withdraw", resource=account_number,
        extra={"transaction_id": transaction.id, "amount": str(transaction.amount)}
    )
    return ledger.get_account(account_number).to_dict()


@router.get("/accounts/{account_number}/history")
async def get_history(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Transaction history, newest first"""
    return [transaction.to_dict() for transaction in ledger.get_history(account_number)]


@router.post("/undo")
async def undo(ledger: Ledger = Depends(get_ledger)):
    """Undo the most recent deposit or withdrawal"""
    result = ledger.undo()
    log_action(
        logger, "info", result.message,
        action="undo", resource=result.account_number,
        extra={"outcome": result.outcome.value}
    )
    return {"message": result.message}


@router.get("/search")
async def search(name: str = "", ledger: Ledger = Depends(get_ledger)):
    """Search accounts by owner name"""
    return [account.to_dict() for account in ledger.search_by_name(name)]


@router.get("/stats")
async def get_stats(ledger: Ledger = Depends(get_ledger)):
    """Ledger statistics"""
    return ledger.get_stats().to_dict()


async def ledger_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map ledger and input errors to {"error": ...} responses"""
    status_code = 404 if isinstance(exc, AccountNotFound) else 400
    log_action(
        logger, "warning", str(exc),
        action="rejected", resource=request.url.path,
        extra={"error_type": type(exc).__name__}
    )
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies with the same error payload"""
    problems = [
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "; ".join(problems) or "Invalid request"})


def create_app(ledger: Optional[Ledger] = None, config: Optional[LedgerConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application"""
    config = config or get_config()
    setup_logging(config.log_level, fmt=config.log_format)

    if ledger is None:
        ledger = Ledger.from_config(config)
        if config.seed_demo_data:
            seed_demo_data(ledger)

    app = FastAPI(
        title="Bank Ledger API",
        description="In-memory bank ledger with transaction history and undo",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValueError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router, prefix="/api", tags=["Ledger"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/")
    async def root():
        """Root endpoint with service information"""
        return {
            "system": "Bank Ledger",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "accounts": "/api/accounts",
                "undo": "/api/undo",
                "search": "/api/search",
                "stats": "/api/stats"
            }
        }

    return app


app = create_app()


# Run server function
def run_server(host: Optional[str] = None, port: Optional[int] = None, reload: Optional[bool] = None):
    """Run the FastAPI server"""
    config = get_config()
    uvicorn.run(
        "bank_ledger.api:app",
        host=config.api_host if host is None else host,
        port=config.api_port if port is None else port,
        reload=config.api_reload if reload is None else reload,
        log_level=config.log_level.lower()
    )
