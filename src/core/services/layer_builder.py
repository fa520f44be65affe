"""Layer Builder: build image, create container, extract the zip, remove container.

Each step runs only if the previous one succeeded. Once a container exists it
is removed even when the extraction fails; the image is always kept so later
builds reuse its cache.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Callable

from core.config import AppSettings
from core.domain.errors import ExternalToolError, FileSystemError
from core.domain.models import LayerBuildPlan, LayerBuildResult
from core.interfaces.tools import ContainerRuntime


@dataclass
class BuildHooks:
    """Optional callbacks for UI layers (one call per step)."""

    step: Callable[[str], None] | None = None


def plan_from_settings(settings: AppSettings | None = None, **overrides: object) -> LayerBuildPlan:
    """Build a plan from settings; `None` overrides keep the configured value."""

    settings = settings or AppSettings()
    values: dict[str, object] = {
        "platform": settings.platform,
        "dockerfile": settings.dockerfile,
        "context": settings.build_context,
        "image_tag": settings.image_tag,
        "artifact_path": settings.artifact_path,
        "output_path": settings.output_path,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return LayerBuildPlan.model_validate(values)


def build_layer(
    plan: LayerBuildPlan,
    *,
    runtime: ContainerRuntime,
    hooks: BuildHooks | None = None,
) -> LayerBuildResult:
    hooks = hooks or BuildHooks()

    def _step(message: str) -> None:
        if hooks.step:
            hooks.step(message)

    platform = plan.platform.value

    try:
        plan.output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"cannot create '{plan.output_path.parent}': {exc}") from exc

    _step(f"Building {plan.image_tag} for {platform} from {plan.dockerfile}")
    runtime.build(
        platform=platform,
        dockerfile=plan.dockerfile,
        tag=plan.image_tag,
        context=plan.context,
    )

    _step(f"Creating container from {plan.image_tag}")
    container_id = runtime.create(platform=platform, image=plan.image_tag)

    try:
        _step(f"Copying {container_id}:{plan.artifact_path} to {plan.output_path}")
        runtime.copy_out(
            container_id=container_id,
            source=plan.artifact_path,
            destination=plan.output_path,
        )
    except Exception:
        _step(f"Removing container {container_id}")
        # The copy failure is the one reported.
        with contextlib.suppress(ExternalToolError):
            runtime.remove(container_id)
        raise

    _step(f"Removing container {container_id}")
    runtime.remove(container_id)
    removed = True

    size = plan.output_path.stat().st_size if plan.output_path.exists() else 0
    return LayerBuildResult(
        plan=plan,
        container_id=container_id,
        output_path=plan.output_path,
        size_bytes=size,
        container_removed=removed,
    )
