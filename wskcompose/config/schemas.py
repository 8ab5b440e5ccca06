"""
Configuration Schemas for wskcompose.

Process-wide flags are carried in a single settings object that is passed
explicitly into every composer instead of being read from globals.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ComposerSettings(BaseModel):
    """
    Settings read at composition time.

    Attributes:
        managed: Tag every entity with the managed-deployment annotation
        strict: Honor a declared runtime even when it contradicts the
            source file extension
        namespace: Namespace used to qualify sequence components
        project_name: Project name recorded in the managed annotation
        skip_mismatched_packages: During deployment merge, skip only the
            package missing from the manifest instead of stopping the scan
    """

    managed: bool = Field(False, description="Managed deployment mode")
    strict: bool = Field(False, description="Strict runtime mode")
    namespace: str = Field("_", description="Target namespace")
    project_name: str = Field("", description="Project name for managed annotation")
    skip_mismatched_packages: bool = Field(
        False,
        description="Continue the deployment merge past unknown package names",
    )

    class Config:
        extra = "forbid"
