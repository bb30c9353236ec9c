"""
Resource identifiers for admission handler routing.

A resource is identified by its API group, version and plural name (GVR).
Handlers declare the resource they serve as a string in the form
"group/version/plural", or "version/plural" for the core API group.
"""

from pydantic import BaseModel, Field, field_validator

from admission_router.errors import ParseError

RESOURCE_SEPARATOR = "/"


class ResourceIdentifier(BaseModel):
    """Canonical group/version/plural triple."""

    model_config = {"frozen": True}

    group: str = Field("", description="API group, empty for the core group")
    version: str = Field(..., description="API version, e.g. v1")
    plural: str = Field(..., description="Lower-cased plural resource name")

    @field_validator("plural")
    @classmethod
    def lowercase_plural(cls, v):
        return v.lower()

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}/{self.plural}"
        return f"{self.version}/{self.plural}"


def parse_resource(value: str) -> ResourceIdentifier:
    """
    Parse a resource identifier string.

    Args:
        value: "group/version/plural" or "version/plural"

    Returns:
        The canonical identifier with the plural lower-cased

    Raises:
        ParseError: If the string does not have two or three segments
    """
    segments = value.split(RESOURCE_SEPARATOR)

    if len(segments) == 3:
        group, version, plural = segments
        return ResourceIdentifier(group=group, version=version, plural=plural)

    if len(segments) == 2:
        version, plural = segments
        return ResourceIdentifier(group="", version=version, plural=plural)

    raise ParseError(value)
