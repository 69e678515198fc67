from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
