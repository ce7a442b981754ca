"""
Pydantic models for YAML resource configuration.
Provides schema validation with clear error messages for resource definitions.
"""

from __future__ import annotations
from typing import Any, Dict, Literal
from pydantic import BaseModel, Field, ValidationError, field_validator


class ResourceEndpointConfig(BaseModel):
    """Where and how to read a paginated collection."""
    id: str = Field(..., description="Unique identifier for the resource")
    name: str = Field(..., description="Human-readable name for the resource")
    base_url: str = Field(..., description="Collection endpoint; items live at base_url/<id>")
    data_key: str = Field("data", description="Response field (dotted path allowed) holding the records")
    id_key: str = Field("id", description="Record field identifying a record")
    page_param: str = Field("page", description="Query parameter carrying the page number")
    headers: Dict[str, str] = Field(default_factory=dict, description="HTTP headers")
    params: Dict[str, Any] = Field(default_factory=dict, description="Extra query parameters")
    timeout_s: int = Field(30, ge=1, le=600, description="HTTP timeout in seconds")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError('base_url must be a valid HTTP/HTTPS URL')
        return v

    @field_validator('data_key', 'id_key', 'page_param')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be empty')
        return v.strip()


class CrudConfig(BaseModel):
    """Which remote write operations are enabled."""
    insert: bool = Field(True, description="Enable add_item")
    update: bool = Field(True, description="Enable update_item")
    delete: bool = Field(True, description="Enable delete_item")
    update_method: Literal["PATCH", "PUT"] = Field("PATCH", description="HTTP method for updates")


class FetchConfig(BaseModel):
    """Initial load behaviour."""
    should_fetch: bool = Field(True, description="Load page 1 on start")
    max_pages: int = Field(1, ge=1, le=1000, description="Pages to load when run from the CLI")


class ResourceConfig(BaseModel):
    """Root configuration model for a resource."""
    resource: ResourceEndpointConfig
    crud: CrudConfig = Field(default_factory=CrudConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)


def load_and_validate_config(config_path: str) -> ResourceConfig:
    """
    Load and validate a resource configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Validated ResourceConfig object

    Raises:
        ValueError: If the YAML is malformed or the configuration is invalid
        FileNotFoundError: If config file doesn't exist
    """
    import yaml

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")

    try:
        return ResourceConfig(**raw_config)
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            field_path = '.'.join(str(loc) for loc in error['loc'])
            error_messages.append(f"  {field_path}: {error['msg']}")

        raise ValueError(
            f"Configuration validation failed for {config_path}:\n" +
            '\n'.join(error_messages)
        ) from e
