import bcrypt
import structlog

from bucketgate.core.core import Service
from bucketgate.core.modules.credential.loader import load_credentials
from bucketgate.core.modules.credential.models import Credential

logger = structlog.get_logger(__name__)


class CredentialService(Service):
    """Read-only list of credentials, loaded once per process."""

    def __init__(self) -> None:
        super().__init__()
        self._credentials: tuple[Credential, ...] | None = None

    @property
    def credentials(self) -> tuple[Credential, ...]:
        if self._credentials is None:
            raise RuntimeError("Credentials not loaded")
        return self._credentials

    def load(self) -> None:
        """Load the credentials file if it has not been loaded yet.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        if self._credentials is not None:
            return
        path = self.core.config.credentials_path
        self._credentials = tuple(load_credentials(path))
        logger.debug("credentials_loaded", path=str(path), user_count=len(self._credentials))

    def find_credential(self, username: str, password: str) -> Credential | None:
        """Return the first credential matching both username and password."""
        for credential in self.credentials:
            if credential.username != username:
                continue
            if credential.password is not None and credential.password == password:
                return credential
            if credential.password_hash is not None and bcrypt.checkpw(
                password.encode("utf-8"), credential.password_hash.encode("utf-8")
            ):
                return credential
        return None

    async def on_start(self) -> None:
        self.load()
