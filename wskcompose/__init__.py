"""
wskcompose - A manifest-to-entity compiler for serverless function platforms.

wskcompose turns a declarative manifest of packages, actions, sequences,
triggers, rules and API endpoints into platform entities ready for a
control-plane client, then applies environment-specific overrides from an
optional deployment file:

- **Action Composition**: Source files, directories and archives become
  executable payloads with a validated runtime kind
- **Parameter Resolution**: Typed inputs with defaults and environment
  substitution
- **Deployment Overrides**: Per-environment inputs and annotations merged
  onto the composed entities

Quick Start:
    >>> from wskcompose import EntitySetBuilder, DeploymentReader, parse_manifest, parse_deployment
    >>>
    >>> project = EntitySetBuilder().build(parse_manifest("manifest.yaml"))
    >>> DeploymentReader(project, parse_deployment("deployment.yaml")).bind_assets()
    >>> payload = project.packages["hello"].actions["greet"].action.to_payload()
"""

__version__ = "0.1.0"
__author__ = "Kuzushi Labs"
__license__ = "MIT"

# Core exports for convenient imports
from wskcompose.config import ComposerSettings, get_settings
from wskcompose.deployers import DeploymentProject, DeploymentReader, EntitySetBuilder
from wskcompose.errors import WskComposeError
from wskcompose.log import configure_logging
from wskcompose.parsers import ManifestParser, parse_deployment, parse_manifest

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Configuration
    "ComposerSettings",
    "get_settings",
    # Composition
    "ManifestParser",
    "EntitySetBuilder",
    "DeploymentProject",
    "DeploymentReader",
    "parse_manifest",
    "parse_deployment",
    # Logging
    "configure_logging",
    # Errors
    "WskComposeError",
]
