# === FILE: site_mirror/config.py ===
"""
Loading and validation of the SiteMirror run configuration.
The schema is a Pydantic model; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)


class MirrorConfig(BaseModel):
    """Configuration of one mirror run. Immutable once built."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_url: HttpUrl = Field(..., description="Root URL; only URLs under it are crawled.")
    output_dir: Path = Field(..., description="Directory the mirror is written to.")
    seeds: List[str] = Field(
        default_factory=lambda: ["/"],
        description="Root-relative paths the crawl starts from.",
    )
    url_list_only: bool = Field(False, description="Do not write files, print visited URLs at the end.")
    download_missing_only: bool = Field(False, description="Skip URLs whose target file already exists.")
    trust_all_certificates: bool = Field(
        False, description="Accept any TLS certificate (self-signed staging hosts)."
    )
    concurrency: int = Field(4, ge=1, description="Number of concurrent fetch workers.")
    user_agent: str = Field("SiteMirror/0.1", min_length=1, description="User-Agent header.")
    timeout: Optional[float] = Field(
        None, gt=0, description="Total seconds per request; client default when unset."
    )

    @field_validator("root_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("seeds", mode="before")
    def _split_seeds(cls, v: Any) -> Any:
        # "/;/404.html" is accepted as well as a list
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            seeds = [part.strip() for item in v for part in str(item).split(";") if part.strip()]
            return seeds or ["/"]
        return v

    @property
    def root(self) -> str:
        return str(self.root_url)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> MirrorConfig:
    """
    Build a validated MirrorConfig from an optional YAML/JSON file.
    Keyword overrides that are not None win over values from the file.
    """
    data = read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return MirrorConfig(**data)
