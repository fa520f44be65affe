"""Target platforms for native-layer builds.

This module centralizes the container platforms the layer builder knows
about. Keeping it in the domain layer lets settings, services and the CLI
share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class Architecture(str, Enum):
    """Supported `--platform` values for `docker buildx`."""

    ARM64 = "linux/arm64"
    AMD64 = "linux/amd64"

    @classmethod
    def default(cls) -> "Architecture":
        """Return the platform Lambda layers are built for by default."""

        return cls.ARM64

    def short_name(self) -> str:
        """CPU part of the platform string (e.g. `arm64`)."""

        return self.value.split("/", 1)[1]

    def label(self) -> str:
        """Human readable label for tables and prompts."""

        return "ARM64 (Graviton)" if self is Architecture.ARM64 else "x86_64"
