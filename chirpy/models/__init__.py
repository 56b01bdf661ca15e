# Chirpy persisted models
from chirpy.models.chirp import Chirp
from chirpy.models.document import SCHEMA_VERSION, Document
from chirpy.models.user import User, UserRecord

__all__ = [
    "SCHEMA_VERSION",
    "Chirp",
    "Document",
    "User",
    "UserRecord",
]
