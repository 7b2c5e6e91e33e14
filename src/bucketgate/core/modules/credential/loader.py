"""Reading the credentials file."""

import json
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from bucketgate.core.modules.credential.models import Credential
from bucketgate.errors import ConfigurationError

_credentials_adapter = TypeAdapter(list[Credential])


def load_credentials(path: Path) -> list[Credential]:
    """Load credentials from a JSON file.

    The file holds either a list of ``{"username": ..., "password": ...}``
    objects or a single such object.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or malformed
    """
    if not path.is_file():
        raise ConfigurationError(
            f"Missing credentials file {path}. "
            'Create one with [{"username": "admin", "password": "secret"}]'
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read credentials file {path}: {e}") from e

    if isinstance(data, dict):
        data = [data]

    try:
        credentials = _credentials_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Malformed credentials file {path}: {e}") from e

    if not credentials:
        raise ConfigurationError(f"Credentials file {path} defines no users")
    return credentials
