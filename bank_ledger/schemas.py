"""
Pydantic schemas for API requests
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


# Amounts arrive as JSON numbers or strings (booleans rejected) and are parsed with money.parse_amount
AmountField = Union[StrictInt, StrictFloat, StrictStr]


class CreateAccountRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_name: str = Field(..., alias="ownerName")
    email: str = ""
    balance: AmountField = Field("0", description="Opening deposit")
    type: str = Field("SAVINGS", description="Account type (SAVINGS, CURRENT)")


class AmountRequest(BaseModel):
    amount: AmountField = Field(..., description="Positive amount")
    note: Optional[str] = None
