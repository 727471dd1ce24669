# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Turns registry credentials into the header values the engine and registries
expect, and keeps credentials per registry.
"""

import base64
import json
import logging
from typing import Dict, Optional

from ..MODELS.image_name import ImageName
from .auth import RegistryAuth

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = "docker.io"


def encode_registry_auth(auth: RegistryAuth) -> str:
    """
    Build the value of the ``X-Registry-Auth`` header.

    Args:
        auth: Credentials to encode. The url is not part of the payload.

    Returns:
        URL-safe base64 of the JSON credential payload.
    """
    config = auth._to_config()
    payload = json.dumps({"username": config.username, "password": config.password})
    return base64.urlsafe_b64encode(payload.encode()).decode()


def basic_authorization(auth: RegistryAuth) -> str:
    """Build a ``Basic`` Authorization header value."""
    config = auth._to_config()
    token = base64.b64encode(f"{config.username}:{config.password}".encode()).decode()
    return f"Basic {token}"


class CredentialStore:
    """
    Credentials keyed by registry host (e.g. 'docker.io', 'localhost:5000').
    """

    def __init__(self):
        self._credentials: Dict[str, RegistryAuth] = {}

    def set_credentials(self, registry: str, username: str, password: str) -> RegistryAuth:
        """
        Set credentials for a registry.

        Args:
            registry: Registry hostname (e.g., 'docker.io')
            username: Username
            password: Password or access token

        Returns:
            The stored credentials.
        """
        auth = RegistryAuth(url=registry, username=username, password=password)
        self._credentials[registry] = auth
        logger.debug("Stored credentials for %s (user %s)", registry, username)
        return auth

    def get(self, registry: str) -> Optional[RegistryAuth]:
        return self._credentials.get(registry)

    def for_image(self, image: ImageName) -> Optional[RegistryAuth]:
        """Credentials for the registry an image is pulled from."""
        return self.get(image.registry or DEFAULT_REGISTRY)

    def registry_auth_header(self, image: ImageName) -> Optional[str]:
        """
        ``X-Registry-Auth`` value for pulling or pushing an image, or None
        when no credentials are known for its registry.
        """
        auth = self.for_image(image)
        if auth is None:
            logger.debug("No credentials for %s", image.registry or DEFAULT_REGISTRY)
            return None
        return encode_registry_auth(auth)

    def __contains__(self, registry: str) -> bool:
        return registry in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)
