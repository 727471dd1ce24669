"""
Protocol-tagged ports and their bindings on the host.
"""
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# Longer digit runs cannot be a port and are refused before int()
PORT_PATTERN = re.compile(r"([0-9]{1,10})/(tcp|udp)")


class Port(BaseModel):
    """
    A container port number together with its protocol.

    Use ``Port.create`` or ``Port.parse`` to get the right variant.
    """
    model_config = ConfigDict(frozen=True)

    port: int

    def __init__(self, **data):
        if type(self) is Port:
            raise TypeError("Port is abstract, use Port.create or Port.parse")
        super().__init__(**data)

    @property
    def protocol(self) -> str:
        raise NotImplementedError

    @staticmethod
    def create(port: int, protocol: str) -> Optional["Port"]:
        """
        Builds a port for the given protocol.

        :param port: The port number.
        :param protocol: Either 'tcp' or 'udp'.
        :return: The port, or None for any other protocol.
        """
        if protocol == "tcp":
            return TcpPort(port=port)
        if protocol == "udp":
            return UdpPort(port=port)
        return None

    @staticmethod
    def parse(raw: Any) -> Optional["Port"]:
        """
        Parses a port in the '<port>/<protocol>' form, e.g. '8080/tcp'.

        :param raw: The text to parse.
        :return: The port, or None if the text is not a tcp or udp port.
        """
        if not isinstance(raw, str):
            return None
        match = PORT_PATTERN.fullmatch(raw)
        if not match:
            return None
        return Port.create(int(match.group(1)), match.group(2))

    def __str__(self) -> str:
        return f"{self.port}/{self.protocol}"


class TcpPort(Port):
    @property
    def protocol(self) -> str:
        return "tcp"


class UdpPort(Port):
    @property
    def protocol(self) -> str:
        return "udp"


class PortBinding(BaseModel):
    """
    Exposure of a container port on the host.
    """
    model_config = ConfigDict(frozen=True)

    host_ip: str = "0.0.0.0"
    host_port: int

    @classmethod
    def on(cls, host_port: int) -> "PortBinding":
        """Binds to the given host port on all interfaces."""
        return cls(host_port=host_port)
