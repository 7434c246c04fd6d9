"""Access to the application container attached at startup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from autostore.core.container import ApplicationContainer


def get_container(request: Request) -> "ApplicationContainer":
    return request.app.state.container


__all__ = ["get_container"]
