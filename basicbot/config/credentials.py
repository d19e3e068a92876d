"""Credential loading.

The bot only needs one secret, the OAuth token sent with ``PASS``. It is read
from a small JSON file of the form ``{"password": "oauth:..."}``.
"""

from __future__ import annotations

import json
import os
from typing import Protocol

import pydantic

from ..errors import CredentialError
from .model import Credentials


class CredentialProvider(Protocol):
    def get_password(self) -> str: ...

    def describe(self) -> str:
        """Where the password comes from, for log lines. Never the secret."""
        ...


class FileCredentialProvider:
    """Reads the token from a JSON credential file.

    An empty file, or an object without ``password``, means no credentials are
    set and yields an empty string. A missing or unreadable file and anything
    that is not a JSON object raise CredentialError.
    """

    def __init__(self, path: str | os.PathLike[str]):
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = str(path)

    def load(self) -> Credentials:
        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise CredentialError(
                f"Cannot read credentials file {self.path}: {e}",
                data={"path": self.path},
            ) from e

        if not content.strip():
            return Credentials()

        try:
            data = json.loads(content)
        except ValueError as e:
            raise CredentialError(
                f"Malformed credentials file {self.path}: {e}",
                data={"path": self.path},
            ) from e
        if not isinstance(data, dict):
            raise CredentialError(
                f"Credentials file {self.path} must contain a JSON object",
                data={"path": self.path},
            )
        try:
            return Credentials.model_validate(data)
        except pydantic.ValidationError as e:
            raise CredentialError(
                f"Invalid credentials in {self.path}: {e.errors()[0]['msg']}",
                data={"path": self.path},
            ) from e

    def get_password(self) -> str:
        return self.load().password

    def describe(self) -> str:
        return self.path
