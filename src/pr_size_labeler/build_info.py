"""Build and runtime details reported by ``--version``."""

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from importlib import metadata

PACKAGE_NAME = "pr-size-labeler"


@dataclass(frozen=True)
class BuildInfo:
    """Version details captured once at startup."""

    version: str
    revision: str
    python_version: str
    started_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def collect(cls, env: Mapping[str, str] | None = None) -> "BuildInfo":
        """Gather build info from package metadata and the environment."""
        env = os.environ if env is None else env
        try:
            package_version = metadata.version(PACKAGE_NAME)
        except metadata.PackageNotFoundError:
            package_version = "unknown"

        return cls(
            version=package_version,
            revision=env.get("BUILD_REVISION") or env.get("GITHUB_SHA") or "unknown",
            python_version=platform.python_version(),
        )

    def format(self) -> str:
        return (
            f"Version: {self.revision} {self.version}\n"
            f"BuildTime: {self.started_at:%Y-%m-%d}\n"
            f"Python {self.python_version}\n"
        )
