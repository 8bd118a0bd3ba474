# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from authportal.shared.errors.base import RenderError
from authportal.shared.logging import logger


class Renderer(Protocol):
    def render(self, view_name: str, context: Mapping[str, Any] | None = None) -> str: ...


class JinjaRenderer(Renderer):
    def __init__(self, environment: Environment | None = None) -> None:
        self._env = environment or Environment(
            loader=PackageLoader("authportal", "templates"),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, view_name: str, context: Mapping[str, Any] | None = None) -> str:
        if context is not None and (
            not isinstance(context, Mapping) or not all(isinstance(k, str) for k in context)
        ):
            raise RenderError(view_name, detail="context must be a mapping with string keys")
        try:
            template = self._env.get_template(view_name)
            return template.render(**dict(context or {}))
        except TemplateError as exc:
            logger.error(f"render: {view_name} failed: {type(exc).__name__}: {exc}")
            raise RenderError(view_name, detail=type(exc).__name__) from exc


__all__ = ["JinjaRenderer", "Renderer"]
