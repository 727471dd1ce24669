"""
Models describing the desired state of a container: image, command,
environment, exposed ports and resource limits.
"""
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .image_name import ImageName
from .port import Port


class StandardStreamsConfig(BaseModel):
    """
    Configuration options for standard streams.
    """
    model_config = ConfigDict(frozen=True)

    attach_stdin: bool = False
    attach_stdout: bool = False
    attach_stderr: bool = False
    tty: bool = False
    # Keep stdin open even if not attached
    open_stdin: bool = False
    # Close stdin when one attached client disconnects
    stdin_once: bool = False


class ContainerResourceLimits(BaseModel):
    """
    Resource limitations on a container. Zero means unset.
    """
    model_config = ConfigDict(frozen=True)

    memory: int = 0
    # memory + swap, -1 disables swap
    memory_swap: int = 0
    memory_reservation: int = 0
    cpu_shares: int = 0
    cpuset: Optional[str] = None  # e.g. "0-2" or "0,1"


class ContainerConfig(BaseModel):
    """
    Configuration for a container.

    Every ``with_*`` method returns a new config with that field replaced,
    the original is left unchanged.

    :param image: Image to run.
    :param entry_point: Entry point for the container.
    :param command: Command to run.
    :param environment_variables: Environment variables as 'KEY=VALUE' strings.
    :param exposed_ports: Ports that the container should expose.
    :param volumes: Paths inside the container that should be exposed.
    :param working_dir: Working directory for commands to run in.
    :param user: Username or UID.
    :param hostname: Container hostname.
    :param domain_name: Container domain name.
    :param standard_streams: Configuration for standard streams.
    :param labels: Labels for the container.
    :param network_disabled: Disable network for the container.
    """
    model_config = ConfigDict(frozen=True)

    image: ImageName
    entry_point: Optional[Tuple[str, ...]] = None
    command: Tuple[str, ...] = ()
    environment_variables: Tuple[str, ...] = ()
    exposed_ports: Tuple[Port, ...] = ()
    volumes: Tuple[str, ...] = ()
    working_dir: Optional[str] = None
    user: Optional[str] = None
    hostname: Optional[str] = None
    domain_name: Optional[str] = None
    standard_streams: StandardStreamsConfig = Field(default_factory=StandardStreamsConfig)
    labels: Dict[str, str] = {}
    network_disabled: bool = False

    def _with(self, **changes) -> "ContainerConfig":
        return self.model_copy(update=changes)

    def with_image(self, image: ImageName) -> "ContainerConfig":
        return self._with(image=image)

    def with_entry_point(self, *args: str) -> "ContainerConfig":
        return self._with(entry_point=tuple(args))

    def with_command(self, *args: str) -> "ContainerConfig":
        return self._with(command=tuple(args))

    def with_environment_variables(self, *pairs: Tuple[str, str]) -> "ContainerConfig":
        """
        Replaces the environment with the given (key, value) pairs,
        stored as 'key=value' strings.
        """
        return self._with(environment_variables=tuple(f"{key}={value}" for key, value in pairs))

    @property
    def environment_variables_map(self) -> Dict[str, str]:
        """
        The environment as a mapping. Entries are split on the first '=',
        an entry without one maps to an empty value.
        """
        env = {}
        for entry in self.environment_variables:
            key, _, value = entry.partition("=")
            env[key] = value
        return env

    def with_exposed_ports(self, *ports: Port) -> "ContainerConfig":
        return self._with(exposed_ports=tuple(ports))

    def with_volumes(self, *paths: str) -> "ContainerConfig":
        return self._with(volumes=tuple(paths))

    # An empty string unsets the following four fields
    def with_working_dir(self, working_dir: Optional[str]) -> "ContainerConfig":
        return self._with(working_dir=working_dir or None)

    def with_user(self, user: Optional[str]) -> "ContainerConfig":
        return self._with(user=user or None)

    def with_hostname(self, hostname: Optional[str]) -> "ContainerConfig":
        return self._with(hostname=hostname or None)

    def with_domain_name(self, domain_name: Optional[str]) -> "ContainerConfig":
        return self._with(domain_name=domain_name or None)

    def with_standard_streams(self, standard_streams: StandardStreamsConfig) -> "ContainerConfig":
        return self._with(standard_streams=standard_streams)

    def with_labels(self, *labels: Tuple[str, str]) -> "ContainerConfig":
        return self._with(labels=dict(labels))

    def with_network_disabled(self, disabled: bool) -> "ContainerConfig":
        return self._with(network_disabled=disabled)
