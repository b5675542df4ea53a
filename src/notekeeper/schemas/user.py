from pydantic import BaseModel


class Credentials(BaseModel):
    """Body of both /signup and /signin.

    Length and charset rules are enforced by the user service so that
    violations surface as 400 with a specific message.
    """
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str
