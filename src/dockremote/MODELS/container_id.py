"""
Container identifiers: by hash or by name.
"""
from pydantic import BaseModel, ConfigDict


class ContainerId(BaseModel):
    """
    Reference to a container, either by its hash or by its name.
    """
    model_config = ConfigDict(frozen=True)

    def __init__(self, **data):
        if type(self) is ContainerId:
            raise TypeError("ContainerId is abstract, use ContainerHashId or ContainerName")
        super().__init__(**data)

    @property
    def value(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.value


class ContainerHashId(ContainerId):
    """
    A container identified by the hash the engine assigned to it.
    """
    hash: str

    @property
    def value(self) -> str:
        return self.hash

    @property
    def short_hash(self) -> str:
        """The 12 character form shown by `docker ps`."""
        return self.hash[:12]


class ContainerName(ContainerId):
    """
    A container identified by its name.
    """
    name: str

    @property
    def value(self) -> str:
        return self.name
