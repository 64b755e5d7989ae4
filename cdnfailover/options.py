"""Pydantic models for the build options.

WHY: Options arrive as plain JSON or as a dict from a host build script.
Typed models give one place where missing or null fields get their
defaults, and they document the accepted keys.

HOW: FailoverOptions mirrors the options object; AssetFileOptions mirrors
one entry of its ``files`` list. Field names match the external keys
exactly (``cdn``, ``local``, ``cdnintegrity``, ...). to_entry() converts
an entry into the immutable AssetEntry used by the core.

RULES:
- Unknown keys are ignored
- Null or missing cdn/local become ""
- A missing or empty name is kept here and skipped by the compiler
- verbose/uselocalfilesonly stay None when unset so callers can apply
  environment defaults
- Python 3.9+ compatible (Optional/List from typing in pydantic fields)
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from cdnfailover.core.models import AssetEntry


class AssetFileOptions(BaseModel):
    """One asset entry as written in the options file."""

    model_config = {"extra": "ignore"}

    name: Optional[str] = Field(
        default=None,
        description="Marker name, matched by <!-- cdnfailover:NAME -->.",
    )
    cdn: str = Field(
        default="",
        description="CDN URL tried first. A trailing 'css' selects the stylesheet snippet.",
    )
    local: str = Field(
        default="",
        description="Path of the bundled copy served when the CDN load fails.",
    )
    cdnintegrity: Optional[str] = Field(
        default=None,
        description="Subresource-integrity hash for the CDN tag.",
    )
    cdncrossorigin: Optional[str] = Field(
        default=None,
        description="crossorigin attribute for the CDN tag.",
    )

    @field_validator("cdn", "local", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_entry(self) -> AssetEntry:
        return AssetEntry(
            name=self.name or "",
            cdn_url=self.cdn,
            local_path=self.local,
            integrity=self.cdnintegrity or None,
            cross_origin=self.cdncrossorigin or None,
        )


class FailoverOptions(BaseModel):
    """Options for one build invocation."""

    model_config = {"extra": "ignore", "json_schema_extra": {
        "examples": [
            {
                "verbose": True,
                "uselocalfilesonly": False,
                "files": [
                    {
                        "name": "bootstrap-min-css",
                        "cdn": "https://maxcdn.bootstrapcdn.com/bootstrap/3.3.7/css/bootstrap.min.css",
                        "local": "css/bootstrap/dist/css/bootstrap.min.css",
                        "cdnintegrity": "sha384-BVYiiSIFeK1dGmJRAkycuHAHRg32OmUcww7on3RYdg4Va+PmSTsz/K68vbdEjh4u",
                        "cdncrossorigin": "anonymous",
                    }
                ],
            }
        ]
    }}

    verbose: Optional[bool] = Field(
        default=None,
        description="Log processed names and replacement counts.",
    )
    uselocalfilesonly: Optional[bool] = Field(
        default=None,
        description="Render tags for the local copies only (offline builds).",
    )
    files: List[AssetFileOptions] = Field(
        default_factory=list,
        description="Asset entries in marker order.",
    )

    @field_validator("files", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def entries(self) -> List[AssetEntry]:
        return [item.to_entry() for item in self.files]
