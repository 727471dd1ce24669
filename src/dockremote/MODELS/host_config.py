"""
Models for the host side of a container: port bindings, links, volume
bindings, devices, capabilities and restart policies.
"""
from typing import ClassVar, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .container_config import ContainerResourceLimits
from .port import Port, PortBinding


def _split_fields(text: str) -> List[str]:
    """
    Splits on ':' dropping trailing empty fields, so 'db:' is one field
    and ':' is none. An empty string stays a single empty field.
    """
    parts = text.split(":")
    if text:
        while parts and not parts[-1]:
            parts.pop()
    return parts


class ContainerLink(BaseModel):
    """
    Legacy link to another container, optionally under an alias.
    """
    model_config = ConfigDict(frozen=True)

    container_name: str
    alias_name: Optional[str] = None

    @classmethod
    def parse(cls, link: str) -> Optional["ContainerLink"]:
        """
        Parses 'name' or 'name:alias'.

        :return: The link, or None for any other shape.
        """
        if not isinstance(link, str):
            return None
        parts = _split_fields(link)
        if len(parts) == 1:
            return cls(container_name=parts[0])
        if len(parts) == 2:
            return cls(container_name=parts[0], alias_name=parts[1])
        return None

    def to_string(self) -> str:
        if self.alias_name is None:
            return self.container_name
        return f"{self.container_name}:{self.alias_name}"

    def __str__(self) -> str:
        return self.to_string()


class VolumeBinding(BaseModel):
    """
    A host path mounted into the container.
    """
    model_config = ConfigDict(frozen=True)

    host_path: str
    container_path: str
    rw: bool = True

    @classmethod
    def parse(cls, binding: str) -> Optional["VolumeBinding"]:
        """
        Parses 'host:container' (read-write) or 'host:container:ro'.

        :return: The binding, or None for any other shape.
        """
        if not isinstance(binding, str):
            return None
        parts = _split_fields(binding)
        if len(parts) == 2:
            return cls(host_path=parts[0], container_path=parts[1], rw=True)
        if len(parts) == 3 and parts[2] == "ro":
            return cls(host_path=parts[0], container_path=parts[1], rw=False)
        return None

    def to_string(self) -> str:
        text = f"{self.host_path}:{self.container_path}"
        return text if self.rw else text + ":ro"

    def __str__(self) -> str:
        return self.to_string()


class DeviceMapping(BaseModel):
    """
    A host device made available inside the container.
    """
    model_config = ConfigDict(frozen=True)

    path_on_host: str
    path_in_container: str
    cgroup_permissions: str

    DEFAULT_PERMISSIONS: ClassVar[str] = "rwm"

    @classmethod
    def parse(cls, device: str) -> Optional["DeviceMapping"]:
        """
        Parses 'host[:container[:permissions]]' the way `docker run --device` does.
        """
        if not isinstance(device, str):
            return None
        parts = device.split(":")
        if not parts[0] or len(parts) > 3:
            return None
        container_path = parts[1] if len(parts) > 1 and parts[1] else parts[0]
        permissions = parts[2] if len(parts) > 2 and parts[2] else cls.DEFAULT_PERMISSIONS
        return cls(path_on_host=parts[0], path_in_container=container_path, cgroup_permissions=permissions)


class LinuxCapabilities(BaseModel):
    """
    Kernel capabilities to add to or drop from the container.
    """
    model_config = ConfigDict(frozen=True)

    add: Tuple[str, ...] = ()
    drop: Tuple[str, ...] = ()


class RestartPolicy(BaseModel):
    """
    Behavior to apply when the container exits.
    """
    model_config = ConfigDict(frozen=True)

    name: ClassVar[str]

    def __init__(self, **data):
        if type(self) is RestartPolicy:
            raise TypeError("RestartPolicy is abstract, use NeverRestart, AlwaysRestart or RestartOnFailure")
        super().__init__(**data)


class NeverRestart(RestartPolicy):
    name: ClassVar[str] = ""


class AlwaysRestart(RestartPolicy):
    name: ClassVar[str] = "always"


class RestartOnFailure(RestartPolicy):
    name: ClassVar[str] = "on-failure"

    maximum_retry_count: int = 0


def restart_policy_from_name(name: str, maximum_retry_count: int = 0) -> Optional[RestartPolicy]:
    """
    Looks up a restart policy by its name, '' and 'no' meaning never.

    :param name: The policy name.
    :param maximum_retry_count: Retries, only used for 'on-failure'.
    :return: The policy, or None for an unknown name.
    """
    if name in (NeverRestart.name, "no"):
        return NeverRestart()
    if name == AlwaysRestart.name:
        return AlwaysRestart()
    if name == RestartOnFailure.name:
        return RestartOnFailure(maximum_retry_count=maximum_retry_count)
    return None


class HostConfig(BaseModel):
    """
    Host configuration for a container.

    :param port_bindings: Exposed container ports mapped to bindings on the host.
    :param publish_all_ports: Allocate a random port for each exposed container port.
    :param links: Container links.
    :param volume_bindings: Volume bindings.
    :param volumes_from: Containers to inherit volumes from.
    :param devices: Devices to add to the container.
    :param read_only_root_filesystem: Mount the root filesystem as read only.
    :param dns_servers: DNS servers for the container to use.
    :param dns_search_domains: DNS search domains.
    :param network_mode: Networking mode for the container.
    :param privileged: Gives the container full access to the host.
    :param capabilities: Kernel capabilities to change.
    :param resource_limits: CPU and memory limits.
    :param restart_policy: Behavior to apply when the container exits.
    """
    model_config = ConfigDict(frozen=True)

    port_bindings: Dict[Port, Tuple[PortBinding, ...]] = {}
    publish_all_ports: bool = False
    links: Tuple[ContainerLink, ...] = ()
    volume_bindings: Tuple[VolumeBinding, ...] = ()
    volumes_from: Tuple[str, ...] = ()
    devices: Tuple[DeviceMapping, ...] = ()
    read_only_root_filesystem: bool = False
    dns_servers: Tuple[str, ...] = ()
    dns_search_domains: Tuple[str, ...] = ()
    network_mode: Optional[str] = None
    privileged: bool = False
    capabilities: LinuxCapabilities = Field(default_factory=LinuxCapabilities)
    resource_limits: ContainerResourceLimits = Field(default_factory=ContainerResourceLimits)
    restart_policy: RestartPolicy = Field(default_factory=NeverRestart)

    def _with(self, **changes) -> "HostConfig":
        return self.model_copy(update=changes)

    def with_port_bindings(self, *ports: Tuple[Port, Iterable[PortBinding]]) -> "HostConfig":
        """Replaces all port bindings with the given (port, bindings) pairs."""
        return self._with(port_bindings={port: tuple(bindings) for port, bindings in ports})

    def with_publish_all_ports(self, publish_all: bool) -> "HostConfig":
        return self._with(publish_all_ports=publish_all)

    def with_links(self, *links: ContainerLink) -> "HostConfig":
        return self._with(links=tuple(links))

    def with_volume_bindings(self, *volume_bindings: VolumeBinding) -> "HostConfig":
        return self._with(volume_bindings=tuple(volume_bindings))

    def with_volumes_from(self, *containers: str) -> "HostConfig":
        return self._with(volumes_from=tuple(containers))

    def with_devices(self, *devices: DeviceMapping) -> "HostConfig":
        return self._with(devices=tuple(devices))

    def with_read_only_root_filesystem(self, read_only: bool) -> "HostConfig":
        return self._with(read_only_root_filesystem=read_only)

    def with_dns_servers(self, *servers: str) -> "HostConfig":
        return self._with(dns_servers=tuple(servers))

    def with_dns_search_domains(self, *search_domains: str) -> "HostConfig":
        return self._with(dns_search_domains=tuple(search_domains))

    def with_network_mode(self, mode: Optional[str]) -> "HostConfig":
        return self._with(network_mode=mode)

    def with_privileged(self, privileged: bool) -> "HostConfig":
        return self._with(privileged=privileged)

    def with_capabilities(self, capabilities: LinuxCapabilities) -> "HostConfig":
        return self._with(capabilities=capabilities)

    def with_resource_limits(self, resource_limits: ContainerResourceLimits) -> "HostConfig":
        return self._with(resource_limits=resource_limits)

    def with_restart_policy(self, restart_policy: RestartPolicy) -> "HostConfig":
        return self._with(restart_policy=restart_policy)
