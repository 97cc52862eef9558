"""Response example locators.

An action only keeps a reference to its response example; the document is
read when its content is first requested by documentation tooling.
"""

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, ConfigDict

from api_registry.errors import ResponseExampleError


class ResponseExample(BaseModel):
    """Opaque locator of an example response document."""

    model_config = ConfigDict(frozen=True)

    location: str

    @classmethod
    def of(cls, location: "str | Path | ResponseExample") -> "ResponseExample":
        if isinstance(location, ResponseExample):
            return location
        return cls(location=str(location))

    @property
    def file_path(self) -> Path:
        if self.location.startswith("file:"):
            return Path(url2pathname(urlparse(self.location).path))
        return Path(self.location)

    @property
    def format(self) -> str:
        """Lower-cased file extension, e.g. 'json' or 'txt'."""
        return self.file_path.suffix.lstrip(".").lower()

    def as_string(self) -> str:
        try:
            return self.file_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ResponseExampleError(f"Fail to load {self.location}") from e

    def __str__(self) -> str:
        return self.location


def resource_example(anchor: str | Path, name: str) -> ResponseExample:
    """Locate an example file stored next to a defining module.

    Typical use: ``resource_example(__file__, "example-show.json")``.
    """
    return ResponseExample.of(Path(anchor).parent / name)
