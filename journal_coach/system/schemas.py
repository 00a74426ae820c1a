from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class HealthResponse(BaseSchema):
    status: str
    timestamp: datetime
    uptime: float
    environment: str
    database_url: str
