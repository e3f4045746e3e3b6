from typing import Literal

from pydantic import BaseModel, ConfigDict

AdminRole = Literal["super_admin", "legal", "compliance", "business", "technical", "partnership"]


class CallerIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_authenticated: bool
    user_id: str | None = None
    role: AdminRole | None = None
