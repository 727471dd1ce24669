"""
Value objects for containers, their configuration and engine responses.
"""
from .container_config import ContainerConfig, ContainerResourceLimits, StandardStreamsConfig
from .container_id import ContainerHashId, ContainerId, ContainerName
from .container_info import (
    ContainerInfo,
    ContainerState,
    ContainerStatus,
    CreateContainerResponse,
    NetworkSettings,
    Node,
)
from .host_config import (
    AlwaysRestart,
    ContainerLink,
    DeviceMapping,
    HostConfig,
    LinuxCapabilities,
    NeverRestart,
    RestartOnFailure,
    RestartPolicy,
    VolumeBinding,
    restart_policy_from_name,
)
from .image_name import ImageName
from .port import Port, PortBinding, TcpPort, UdpPort
