"""
Image names as used when creating containers and listing them.
Parses references like 'nginx', 'nginx:1.21' or 'localhost:5000/team/app:v1'.
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class ImageName(BaseModel):
    """
    Name of an image, split into its parts.

    Examples:
        - nginx -> repository 'nginx', tag 'latest'
        - myuser/myimage:v1 -> namespace 'myuser', repository 'myimage', tag 'v1'
        - quay.io/org/team/app:2 -> registry 'quay.io', namespace 'org/team', repository 'app'
    """
    model_config = ConfigDict(frozen=True)

    registry: Optional[str] = None
    namespace: Optional[str] = None
    repository: str
    tag: str = "latest"

    DEFAULT_TAG: ClassVar[str] = "latest"

    @classmethod
    def parse(cls, name: str) -> "ImageName":
        """
        Parse an image name string.

        Args:
            name: Image name (e.g., 'nginx:latest', 'myuser/myimage:v1')

        Returns:
            Parsed ImageName.
        """
        if not name:
            raise ValueError("Empty image name")

        tag = cls.DEFAULT_TAG
        last_colon = name.rfind(":")
        if last_colon != -1 and "/" not in name[last_colon + 1 :]:
            # A colon followed by a path is a registry port, not a tag
            tag = name[last_colon + 1 :] or cls.DEFAULT_TAG
            name = name[:last_colon]

        parts = name.split("/")
        registry = None
        if len(parts) > 1:
            first = parts[0]
            if "." in first or ":" in first or first == "localhost":
                registry = first
                parts = parts[1:]

        repository = parts[-1]
        if not repository:
            raise ValueError(f"Missing repository in image name: {name!r}")
        namespace = "/".join(parts[:-1]) or None

        return cls(registry=registry, namespace=namespace, repository=repository, tag=tag)

    def with_tag(self, tag: str) -> "ImageName":
        return self.model_copy(update={"tag": tag})

    def __str__(self) -> str:
        parts = [p for p in (self.registry, self.namespace, self.repository) if p]
        return "/".join(parts) + f":{self.tag}"
