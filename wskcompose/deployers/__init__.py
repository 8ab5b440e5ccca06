"""
Entity set building and deployment overrides.

Usage:
    project = EntitySetBuilder(settings).build(manifest)
    DeploymentReader(project, deployment, settings).bind_assets()
"""

from .builder import EntitySetBuilder
from .deployment import DeploymentProject, PackageDeployment
from .deployment_reader import DeploymentReader, merge_annotations, merge_inputs

__all__ = [
    "DeploymentProject",
    "DeploymentReader",
    "EntitySetBuilder",
    "PackageDeployment",
    "merge_annotations",
    "merge_inputs",
]
