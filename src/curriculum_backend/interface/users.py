from pydantic import BaseModel, ConfigDict
from typing import Optional

class UserList(BaseModel):
    id: int
    login: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
