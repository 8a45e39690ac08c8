"""
API Routes - All API endpoints
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import ErrorResponse, HealthResponse
from receipt_resolver import ReceiptResolver
from loguru import logger

# Create router
router = APIRouter()

_resolver = None


def get_resolver() -> ReceiptResolver:
    """Lazily build the shared resolver on first request"""
    global _resolver
    if _resolver is None:
        _resolver = ReceiptResolver.from_config()
    return _resolver


# ==================== UTILITY FUNCTIONS ====================

def caller_ip(request: Request) -> str:
    """Client IP as seen by the proxy, else the socket peer"""
    forwarded = request.headers.get('x-forwarded-for')
    if forwarded:
        return forwarded
    if request.client and request.client.host:
        return request.client.host
    return 'Unknown'


def caller_user_agent(request: Request) -> str:
    return request.headers.get('user-agent') or 'Unknown'


# ==================== API ENDPOINTS ====================

@router.get("/getresult/{transaction_id}", tags=["Receipts"])
async def get_result(
    transaction_id: str,
    request: Request,
    resolver: ReceiptResolver = Depends(get_resolver),
):
    """
    **Resolve a payment transaction**

    `FT…` IDs are looked up on CBE (PDF receipt), everything else on
    Telebirr (HTML receipt).

    **Returns:**
    - `{source, transactionId, link, data}` on success
    - 500 with `{error, detail, transactionId}` on any failure

    **Example:**
    ```bash
    curl http://localhost:2268/getresult/FT25123ABCDE
    ```
    """
    try:
        record = await resolver.resolve(
            transaction_id,
            caller_ip=caller_ip(request),
            user_agent=caller_user_agent(request),
        )
        return record.to_response()

    except Exception as e:
        logger.error(f"Error resolving {transaction_id}: {e}")
        body = ErrorResponse(detail=str(e), transaction_id=transaction_id)
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    return HealthResponse()
