"""
API Models — Response schemas
Using Pydantic for automatic validation and documentation

The success body is the PaymentRecord itself (see payment_record.py);
these models cover the failure and health responses.
"""

from pydantic import BaseModel, ConfigDict, Field


# ─── Error Models ─────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Failed lookup — any resolver error, raw message in `detail`."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "error": "Failed to process transaction",
                "detail": "Invalid Telebirr transaction ID",
                "transactionId": "CJK1234XYZ",
            }
        },
    )

    error: str          = Field("Failed to process transaction", description="Generic failure message")
    detail: str         = Field(...,  description="Underlying error message")
    transaction_id: str = Field(...,  alias="transactionId", description="Transaction ID that was requested")


# ─── Health Models ────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",                  description="Health status")
    service: str = Field("payment-receipt-resolver", description="Service name")
    version: str = Field("1.0.0",                    description="API version")
