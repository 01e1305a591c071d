"""Account models."""

from typing import Optional

from pydantic import BaseModel, Field


class Account(BaseModel):
    """Account as returned to clients. A missing id means not yet created."""
    id: Optional[str] = Field(None, description="Account identifier")
    name: str = Field(..., description="Display name")

    model_config = {
        "json_schema_extra": {
            "example": {"id": "acc_9f2c", "name": "Checking"}
        }
    }


class AccountRecord(BaseModel):
    """Stored account, scoped to its owner."""
    id: str
    name: str
    user_id: str

    def to_account(self) -> Account:
        return Account(id=self.id, name=self.name)
