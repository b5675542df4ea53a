from pydantic import BaseModel, ConfigDict

class ORMBase(BaseModel):
    """Base for response schemas built from ORM rows or service dataclasses."""
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
