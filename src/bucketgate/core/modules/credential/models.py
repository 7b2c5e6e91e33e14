import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Modular crypt format produced by bcrypt: $2b$<cost>$<22 salt + 31 hash chars>
BCRYPT_HASH_RE = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")


class Credential(BaseModel):
    """A username/password pair allowed to log in.

    Either ``password`` (plaintext, compared by exact match) or
    ``password_hash`` (bcrypt) must be set.
    """

    username: str = Field(..., min_length=1)
    password: str | None = None
    password_hash: str | None = None  # bcrypt hash

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def check_secret(self) -> Self:
        if (self.password is None) == (self.password_hash is None):
            raise ValueError("exactly one of 'password' or 'password_hash' is required")
        if self.password_hash is not None and not BCRYPT_HASH_RE.fullmatch(self.password_hash):
            raise ValueError("'password_hash' is not a bcrypt hash")
        return self
