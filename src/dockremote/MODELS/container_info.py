"""
Read-only snapshots returned by the engine: inspect results, list entries,
state and network settings.
"""
from datetime import datetime
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .container_config import ContainerConfig
from .container_id import ContainerHashId
from .host_config import HostConfig, VolumeBinding
from .image_name import ImageName
from .port import Port, PortBinding


class CreateContainerResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ContainerHashId
    warnings: Tuple[str, ...] = ()


class ContainerState(BaseModel):
    """
    Runtime status of a container.
    """
    model_config = ConfigDict(frozen=True)

    running: bool
    paused: bool
    restarting: bool
    pid: int
    exit_code: int
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class NetworkSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_address: str
    ip_prefix_length: int
    gateway: str
    bridge: str
    ports: Dict[Port, Tuple[PortBinding, ...]] = {}


class Node(BaseModel):
    """
    Cluster node a container is scheduled on.
    """
    model_config = ConfigDict(frozen=True)

    labels: Dict[str, str] = {}
    memory: int
    cpus: int
    name: str
    address: str
    ip: str
    id: str


class ContainerInfo(BaseModel):
    """
    Full inspect result for a container.
    """
    model_config = ConfigDict(frozen=True)

    id: ContainerHashId
    created: datetime
    path: str
    args: Tuple[str, ...] = ()
    config: ContainerConfig
    state: ContainerState
    image: str
    network_settings: NetworkSettings
    resolv_conf_path: str
    hostname_path: str
    hosts_path: str
    name: str
    mount_label: Optional[str] = None
    process_label: Optional[str] = None
    volumes: Tuple[VolumeBinding, ...] = ()
    host_config: HostConfig
    node: Optional[Node] = None

    @property
    def is_running(self) -> bool:
        return self.state.running


class ContainerStatus(BaseModel):
    """
    Summary of a container as shown in a container listing.
    """
    model_config = ConfigDict(frozen=True)

    command: str
    created: datetime
    id: ContainerHashId
    image: ImageName
    names: Tuple[str, ...] = ()
    ports: Dict[Port, Tuple[PortBinding, ...]] = {}
    labels: Dict[str, str] = {}
    status: str

    @property
    def short_id(self) -> str:
        return self.id.short_hash
