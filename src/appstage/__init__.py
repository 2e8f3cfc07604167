# Where: appstage.__init__
# What: Expose the publish cache and the standalone tree copier at package level.
# Why: Test harnesses only need these entry points.

"""Build an application once per configuration and stage isolated copies for tests."""

from appstage.features.publish import (
    ApplicationType,
    DeploymentParameters,
    PublishCache,
    PublishError,
    RuntimeArchitecture,
)
from appstage.platform.filesystem import copy_tree

__all__ = [
    "ApplicationType",
    "DeploymentParameters",
    "PublishCache",
    "PublishError",
    "RuntimeArchitecture",
    "copy_tree",
]
