"""AWS Systems Manager Parameter Store backend.

:class:`ParameterStore` implements :class:`~paramauth.store.base.SecretStore`
with ``aiobotocore`` so reads and writes never block the event loop. A
short-lived SSM client is opened per call; the underlying session (and its
credential resolution) is created once and shared.

Error mapping:

- ``ParameterNotFound`` → ``ABSENT``.
- Any other ``ClientError`` (throttling, ``AccessDenied``, KMS failures) or
  ``BotoCoreError`` (endpoint unreachable, missing credentials) →
  ``UNAVAILABLE``.
- A failed ``put_parameter`` → :class:`~paramauth.exceptions.SecretStoreWriteError`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from aiobotocore.session import AioSession, get_session
from botocore.exceptions import BotoCoreError, ClientError

from paramauth.config import DEFAULT_REGION
from paramauth.exceptions import SecretStoreWriteError
from paramauth.store.base import SecretStore, StoreLookup

logger = logging.getLogger(__name__)

_NOT_FOUND_CODE = "ParameterNotFound"


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class ParameterStore(SecretStore):
    """SSM Parameter Store implementation of the secret store port.

    Args:
        region_name: AWS region hosting the parameters.
        session: Optional pre-built :class:`aiobotocore.session.AioSession`,
            mainly for tests.

    Example::

        store = ParameterStore(region_name="eu-west-1")
        lookup = await store.get("/oauth/acme/client_credentials/secrets")
    """

    def __init__(
        self,
        region_name: str = DEFAULT_REGION,
        session: Optional[AioSession] = None,
    ) -> None:
        self._region_name = region_name
        self._session = session

    @property
    def region_name(self) -> str:
        return self._region_name

    def _client(self) -> Any:
        if self._session is None:
            self._session = get_session()
        return self._session.create_client("ssm", region_name=self._region_name)

    async def get(self, path: str, decrypt: bool = True) -> StoreLookup:
        try:
            async with self._client() as client:
                response = await client.get_parameter(Name=path, WithDecryption=decrypt)
        except ClientError as exc:
            if _error_code(exc) == _NOT_FOUND_CODE:
                return StoreLookup.absent()
            logger.warning("Parameter Store read of %s failed: %s", path, exc)
            return StoreLookup.unavailable(exc)
        except BotoCoreError as exc:
            logger.warning("Parameter Store read of %s failed: %s", path, exc)
            return StoreLookup.unavailable(exc)

        value = response.get("Parameter", {}).get("Value")
        if value is None:
            return StoreLookup.absent()
        return StoreLookup.present(value)

    async def put(
        self,
        path: str,
        value: str,
        secure: bool = True,
        overwrite: bool = True,
    ) -> None:
        try:
            async with self._client() as client:
                await client.put_parameter(
                    Name=path,
                    Value=value,
                    Type="SecureString" if secure else "String",
                    Overwrite=overwrite,
                )
        except (ClientError, BotoCoreError) as exc:
            raise SecretStoreWriteError(
                f"failed to write parameter {path}: {exc}"
            ) from exc
        logger.debug("successfully updated parameter %s", path)
