from pydantic import BaseModel


class CallerSession(BaseModel):
    """Identity of the caller, resolved once per request and passed explicitly"""
    user_id: str
    token_id: str
