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
Parser for YAML container spec files.

A spec file describes one container: the container config at the top level
and its host config under ``host``::

    image: nginx:1.21
    command: nginx -g "daemon off;"
    environment:
      TZ: ${TZ:-UTC}
    exposed_ports: [80/tcp]
    host:
      port_bindings:
        80/tcp: [8080, "127.0.0.1:8443"]
      volume_bindings: ["/srv/www:/usr/share/nginx/html:ro"]
      restart_policy: on-failure:3
"""
import logging
import os
import re
import shlex
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..MODELS.container_config import ContainerConfig, ContainerResourceLimits, StandardStreamsConfig
from ..MODELS.host_config import (
    ContainerLink,
    DeviceMapping,
    HostConfig,
    LinuxCapabilities,
    RestartPolicy,
    VolumeBinding,
    restart_policy_from_name,
)
from ..MODELS.image_name import ImageName
from ..MODELS.port import Port, PortBinding, TcpPort
from ..UTILS.string_interpolation import EnvironmentInterpolator

logger = logging.getLogger(__name__)

T = TypeVar("T")

DIGITS = re.compile(r"[0-9]{1,10}")

CONFIG_KEYS = {
    "image", "entry_point", "command", "environment", "exposed_ports", "volumes",
    "working_dir", "user", "hostname", "domain_name", "standard_streams", "labels",
    "network_disabled", "host",
}
HOST_KEYS = set(HostConfig.model_fields)


class ContainerSpecError(ValueError):
    """
    A container spec file could not be turned into a configuration.
    """
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class ContainerSpec(BaseModel):
    """
    A container config together with the host config to run it with.
    """
    model_config = ConfigDict(frozen=True)

    config: ContainerConfig
    host_config: HostConfig = Field(default_factory=HostConfig)


class ContainerSpecParser:
    """
    Parser for container spec files.
    """
    def __init__(self, context: Optional[Mapping[str, str]] = None):
        """
        :param context: Variables for interpolation, defaults to the process environment.
        """
        self.context = dict(os.environ) if context is None else dict(context)

    def parse(self, spec_path: str) -> ContainerSpec:
        """
        Parses a spec file from a path.

        :param spec_path: Path to the spec file.
        :return: Parsed spec.
        """
        with open(spec_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> ContainerSpec:
        """
        Parses a spec from YAML text.

        :param content: YAML content of the spec.
        :return: Parsed spec.
        :raises ContainerSpecError: If the spec is invalid.
        """
        try:
            content = EnvironmentInterpolator.interpolate(content, self.context)
        except KeyError as e:
            raise ContainerSpecError(f"Variable {e.args[0]} is not set") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ContainerSpecError(f"Invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ContainerSpecError("Spec must be a mapping")
        self._check_keys(data, CONFIG_KEYS, None)

        host_data = data.get('host') or {}
        if not isinstance(host_data, dict):
            raise ContainerSpecError("must be a mapping", "host")
        self._check_keys(host_data, HOST_KEYS, "host")

        spec = ContainerSpec(
            config=self._parse_config(data),
            host_config=self._parse_host_config(host_data),
        )
        logger.debug("Parsed container spec for image %s", spec.config.image)
        return spec

    def _parse_config(self, data: Dict[str, Any]) -> ContainerConfig:
        image = data.get('image')
        if not image or not isinstance(image, str):
            raise ContainerSpecError("is required", "image")
        try:
            config = ContainerConfig(image=ImageName.parse(image))
        except ValueError as e:
            raise ContainerSpecError(str(e), "image") from e

        if 'entry_point' in data:
            config = config.with_entry_point(*self._to_args(data['entry_point'], 'entry_point'))
        config = config.with_command(*self._to_args(data.get('command'), 'command'))
        config = config.model_copy(update={
            'environment_variables': self._parse_environment(data.get('environment')),
        })
        config = config.with_exposed_ports(
            *self._parse_each(data.get('exposed_ports'), Port.parse, 'exposed_ports', 'port'))
        config = config.with_volumes(*self._to_list(data.get('volumes'), 'volumes'))

        config = config.with_working_dir(self._optional_str(data, 'working_dir'))
        config = config.with_user(self._optional_str(data, 'user'))
        config = config.with_hostname(self._optional_str(data, 'hostname'))
        config = config.with_domain_name(self._optional_str(data, 'domain_name'))

        config = config.with_standard_streams(
            self._validate(StandardStreamsConfig, data.get('standard_streams'), 'standard_streams'))
        config = config.with_labels(*self._to_pairs(data.get('labels'), 'labels'))
        return config.with_network_disabled(self._bool(data, 'network_disabled', 'network_disabled'))

    def _parse_host_config(self, data: Dict[str, Any]) -> HostConfig:
        host = HostConfig()
        host = host.with_port_bindings(*self._parse_port_bindings(data.get('port_bindings')))
        host = host.with_publish_all_ports(self._bool(data, 'publish_all_ports', 'host.publish_all_ports'))
        host = host.with_links(
            *self._parse_each(data.get('links'), ContainerLink.parse, 'host.links', 'link'))
        host = host.with_volume_bindings(
            *self._parse_each(data.get('volume_bindings'), VolumeBinding.parse,
                              'host.volume_bindings', 'volume binding'))
        host = host.with_volumes_from(*self._to_list(data.get('volumes_from'), 'host.volumes_from'))
        host = host.with_devices(*self._parse_devices(data.get('devices')))
        host = host.with_read_only_root_filesystem(
            self._bool(data, 'read_only_root_filesystem', 'host.read_only_root_filesystem'))
        host = host.with_dns_servers(*self._to_list(data.get('dns_servers'), 'host.dns_servers'))
        host = host.with_dns_search_domains(
            *self._to_list(data.get('dns_search_domains'), 'host.dns_search_domains'))
        host = host.with_network_mode(self._optional_str(data, 'network_mode'))
        host = host.with_privileged(self._bool(data, 'privileged', 'host.privileged'))
        host = host.with_capabilities(
            self._validate(LinuxCapabilities, data.get('capabilities'), 'host.capabilities'))
        host = host.with_resource_limits(
            self._validate(ContainerResourceLimits, data.get('resource_limits'), 'host.resource_limits'))
        if data.get('restart_policy') is not None:
            host = host.with_restart_policy(self._parse_restart_policy(data['restart_policy']))
        return host

    def _parse_environment(self, env_spec: Any) -> Tuple[str, ...]:
        """
        Environment given as a mapping or as a list of 'KEY=VALUE' strings.
        """
        if env_spec is None:
            return ()
        if isinstance(env_spec, dict):
            return tuple(f"{key}={'' if value is None else value}" for key, value in env_spec.items())
        return tuple(self._to_list(env_spec, 'environment'))

    def _parse_port_bindings(self, bindings_spec: Any) -> List[Tuple[Port, List[PortBinding]]]:
        if bindings_spec is None:
            return []
        if not isinstance(bindings_spec, dict):
            raise ContainerSpecError("must be a mapping of port to bindings", "host.port_bindings")

        result = []
        for key, value in bindings_spec.items():
            field = f"host.port_bindings.{key}"
            # A bare number is a tcp port, as in compose files
            port = TcpPort(port=key) if isinstance(key, int) else Port.parse(key)
            if port is None:
                raise ContainerSpecError(f"Invalid port {key!r}", field)
            if value is None:
                values = []
            else:
                values = value if isinstance(value, list) else [value]
            result.append((port, [self._parse_port_binding(v, field) for v in values]))
        return result

    def _parse_port_binding(self, value: Any, field: str) -> PortBinding:
        """
        A binding is a host port, 'host_ip:host_port' or a mapping.
        """
        if isinstance(value, dict):
            return self._validate(PortBinding, value, field)
        host_ip, _, host_port = str(value).rpartition(':')
        if not DIGITS.fullmatch(host_port):
            raise ContainerSpecError(f"Invalid port binding {value!r}", field)
        if host_ip:
            return PortBinding(host_ip=host_ip, host_port=int(host_port))
        return PortBinding.on(int(host_port))

    def _parse_devices(self, devices_spec: Any) -> List[DeviceMapping]:
        devices = []
        for i, device in enumerate(self._to_list(devices_spec, 'host.devices', allow_dicts=True)):
            field = f"host.devices[{i}]"
            if isinstance(device, dict):
                devices.append(self._validate(DeviceMapping, device, field))
                continue
            mapping = DeviceMapping.parse(device)
            if mapping is None:
                raise ContainerSpecError(f"Invalid device {device!r}", field)
            devices.append(mapping)
        return devices

    def _parse_restart_policy(self, value: Any) -> RestartPolicy:
        """
        Accepts 'no', 'always', 'on-failure' and 'on-failure:<retries>'.
        """
        name, _, retries = str(value).partition(':')
        if retries and (name != 'on-failure' or not DIGITS.fullmatch(retries)):
            raise ContainerSpecError(f"Invalid restart policy {value!r}", "host.restart_policy")
        policy = restart_policy_from_name(name, int(retries or 0))
        if policy is None:
            raise ContainerSpecError(f"Unknown restart policy {value!r}", "host.restart_policy")
        return policy

    def _parse_each(self, values: Any, parse: Callable[[str], Optional[T]],
                    field: str, kind: str) -> List[T]:
        """
        Parses every entry of a list with a mini-grammar parser.
        """
        parsed = []
        for i, raw in enumerate(self._to_list(values, field)):
            item = parse(raw)
            if item is None:
                raise ContainerSpecError(f"Invalid {kind} {raw!r}", f"{field}[{i}]")
            parsed.append(item)
        return parsed

    def _validate(self, model: type, value: Any, field: str):
        if value is None:
            return model()
        if not isinstance(value, dict):
            raise ContainerSpecError("must be a mapping", field)
        try:
            return model.model_validate(value)
        except ValidationError as e:
            raise ContainerSpecError(str(e), field) from e

    def _bool(self, data: Dict[str, Any], key: str, field: str) -> bool:
        """
        Only YAML booleans are accepted, a quoted "false" is an error.
        """
        value = data.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise ContainerSpecError(f"must be true or false, got {value!r}", field)
        return value

    def _optional_str(self, data: Dict[str, Any], key: str) -> Optional[str]:
        value = data.get(key)
        return None if value is None else str(value)

    def _to_args(self, val: Any, field: str) -> List[str]:
        """
        A command given as a string is split the way a shell would.
        """
        if isinstance(val, str):
            try:
                return shlex.split(val)
            except ValueError as e:
                raise ContainerSpecError(str(e), field) from e
        return self._to_list(val, field)

    def _to_pairs(self, val: Any, field: str) -> List[Tuple[str, str]]:
        if val is None:
            return []
        if not isinstance(val, dict):
            raise ContainerSpecError("must be a mapping", field)
        return [(str(k), '' if v is None else str(v)) for k, v in val.items()]

    def _to_list(self, val: Any, field: str, allow_dicts: bool = False) -> List[Any]:
        """
        Helper to ensure a value is a list of strings.

        :param val: The value to convert.
        :param field: Field name used in error messages.
        :param allow_dicts: Keep mapping entries as they are.
        :return: A list of strings.
        """
        if val is None:
            return []
        if isinstance(val, str):
            return [val]
        if not isinstance(val, list):
            raise ContainerSpecError("must be a list", field)
        return [v if allow_dicts and isinstance(v, dict) else str(v) for v in val]

    def _check_keys(self, data: Dict[str, Any], allowed: set, section: Optional[str]) -> None:
        unknown = sorted(str(k) for k in data if k not in allowed)
        if unknown:
            raise ContainerSpecError(f"Unknown keys: {', '.join(unknown)}", section)
