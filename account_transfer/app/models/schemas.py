from pydantic import BaseModel, ConfigDict, Field

# Largest value a signed 64-bit INTEGER column holds.
MAX_MONEY = 2**63 - 1

class AccountCreate(BaseModel):
    member_id: str = Field(..., min_length=1, description="Externally assigned account id")
    money: int = Field(
        default=0, ge=0, le=MAX_MONEY, description="Opening balance in minor units"
    )

class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    member_id: str
    money: int

class TransferRequest(BaseModel):
    from_id: str = Field(..., min_length=1)
    to_id: str = Field(..., min_length=1)
    amount: int = Field(
        ..., ge=1, le=MAX_MONEY, description="Amount in minor units (must be >= 1)"
    )

class TransferResponse(BaseModel):
    source: AccountResponse
    dest: AccountResponse
