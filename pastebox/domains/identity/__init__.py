from pastebox.domains.identity.entities import User, normalize_email
from pastebox.domains.identity.schemas import Credentials, UserResponse, UserEnvelope, OkResponse

__all__ = [
    "User", "normalize_email",
    "Credentials", "UserResponse", "UserEnvelope", "OkResponse"
]
