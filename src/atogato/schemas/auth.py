from pydantic import BaseModel, ConfigDict, Field


class TokenType:
    """Token type constants."""

    ACCESS = "access"


class Principal(BaseModel):
    """Authenticated identity behind a request."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
