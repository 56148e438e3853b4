from typing import Optional

from pydantic import BaseModel


class AdminLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminStats(BaseModel):
    totalRestaurants: int
    totalComments: int
