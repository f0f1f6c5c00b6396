import uuid
from datetime import datetime

from .base import CamelModel


class User(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime
