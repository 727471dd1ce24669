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
Unit tests for the registry module.
"""
import base64
import json

import dockremote.REGISTRY as registry
from dockremote.MODELS.image_name import ImageName
from dockremote.REGISTRY.auth import RegistryAuth
from dockremote.REGISTRY.credentials import CredentialStore, basic_authorization, encode_registry_auth


class TestRegistryAuth:
    """Tests for RegistryAuth."""

    def test_password_not_in_repr(self):
        """Test the password is hidden from repr."""
        auth = RegistryAuth(url="https://index.docker.io/v1/", username="alice", password="s3cret")
        assert "s3cret" not in repr(auth)
        assert "alice" in repr(auth)

    def test_config_form_not_exported(self):
        """Test the internal config form is not part of the public package."""
        assert not hasattr(registry, "_RegistryAuthConfig")
        assert "RegistryAuth" in dir(registry)


class TestHeaders:
    """Tests for header encoding."""

    def test_encode_registry_auth_excludes_url(self):
        """Test the X-Registry-Auth payload only holds username and password."""
        auth = RegistryAuth(url="registry.example.org", username="alice", password="s3cret")
        payload = json.loads(base64.urlsafe_b64decode(encode_registry_auth(auth)))
        assert payload == {"username": "alice", "password": "s3cret"}

    def test_basic_authorization(self):
        """Test Basic authorization header value."""
        auth = RegistryAuth(url="registry.example.org", username="alice", password="s3cret")
        header = basic_authorization(auth)
        assert header.startswith("Basic ")
        assert base64.b64decode(header[len("Basic "):]) == b"alice:s3cret"


class TestCredentialStore:
    """Tests for CredentialStore lookups."""

    def test_lookup_by_registry(self):
        """Test credentials are found for an image's registry."""
        store = CredentialStore()
        store.set_credentials("localhost:5000", "bob", "pw")
        auth = store.for_image(ImageName.parse("localhost:5000/team/app:v1"))
        assert auth.username == "bob"
        assert "localhost:5000" in store
        assert len(store) == 1

    def test_default_registry(self):
        """Test images without a registry use docker.io credentials."""
        store = CredentialStore()
        store.set_credentials("docker.io", "alice", "pw")
        assert store.for_image(ImageName.parse("nginx")).url == "docker.io"

    def test_registry_auth_header(self):
        """Test header is built only when credentials are known."""
        store = CredentialStore()
        image = ImageName.parse("quay.io/org/app")
        assert store.registry_auth_header(image) is None

        store.set_credentials("quay.io", "carol", "pw")
        header = store.registry_auth_header(image)
        assert json.loads(base64.urlsafe_b64decode(header))["username"] == "carol"
