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
Registry credentials.

``RegistryAuth`` can be passed around freely. The form that is actually sent
to a registry, username and password without the url, is only built inside
this package (see ``credentials``).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistryAuth:
    """Credentials for one registry."""

    url: str
    username: str
    password: str = field(repr=False)

    def _to_config(self) -> "_RegistryAuthConfig":
        return _RegistryAuthConfig(username=self.username, password=self.password)


@dataclass(frozen=True)
class _RegistryAuthConfig:
    username: str
    password: str = field(repr=False)
