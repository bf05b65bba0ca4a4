"""Container image reference parsing."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from devservices_oracle.errors import ImageResolutionError

_COMPONENT_RE = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")
_TAG_RE = re.compile(r"^\w[\w.-]{0,127}$")
_DIGEST_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}$")


class ImageName(BaseModel):
    """A parsed image reference such as ``docker.io/gvenzl/oracle-xe:21-slim``.

    Attributes:
        registry: Registry host, or None for the default registry.
        repository: Repository path (e.g., "gvenzl/oracle-xe").
        tag: Tag, or None when unspecified or pinned by digest.
        digest: Content digest, if the reference is pinned.
    """

    model_config = ConfigDict(frozen=True)

    registry: str | None = Field(default=None, description="Registry host")
    repository: str = Field(description="Repository path")
    tag: str | None = Field(default=None, description="Image tag")
    digest: str | None = Field(default=None, description="Content digest")

    @classmethod
    def parse(cls, reference: str) -> ImageName:
        """Parse an image reference.

        Raises:
            ImageResolutionError: If the reference is not a valid image name.
        """
        ref = reference.strip()
        if not ref:
            raise ImageResolutionError("Image reference is empty")

        digest = None
        if "@" in ref:
            ref, digest = ref.split("@", 1)
            if not _DIGEST_RE.match(digest):
                raise ImageResolutionError(f"Invalid digest in image reference {reference!r}")

        tag = None
        last_slash = ref.rfind("/")
        last_colon = ref.rfind(":")
        if last_colon > last_slash:
            ref, tag = ref[:last_colon], ref[last_colon + 1 :]
            if not _TAG_RE.match(tag):
                raise ImageResolutionError(f"Invalid tag in image reference {reference!r}")

        parts = ref.split("/")
        registry = None
        if len(parts) > 1 and ("." in parts[0] or ":" in parts[0] or parts[0] == "localhost"):
            registry = parts.pop(0)

        if not parts or not all(_COMPONENT_RE.match(part) for part in parts):
            raise ImageResolutionError(f"Invalid repository in image reference {reference!r}")

        return cls(registry=registry, repository="/".join(parts), tag=tag, digest=digest)

    @property
    def unversioned_part(self) -> str:
        """Registry and repository without tag or digest."""
        return f"{self.registry}/{self.repository}" if self.registry else self.repository

    @property
    def canonical_name(self) -> str:
        """Full reference, as handed to the container engine."""
        name = self.unversioned_part
        if self.tag:
            name = f"{name}:{self.tag}"
        if self.digest:
            name = f"{name}@{self.digest}"
        return name

    def __str__(self) -> str:
        return self.canonical_name


__all__ = ["ImageName"]
