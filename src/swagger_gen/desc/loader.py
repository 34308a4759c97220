"""Service loader: resolves ``package.module:attribute`` targets."""

import importlib
from collections.abc import Iterable
from typing import Any

from swagger_gen.desc.base import ServiceDescriptor
from swagger_gen.errors import ServiceLoadError


def load_services(target: str) -> list[ServiceDescriptor]:
    """Import ``target`` and return the services it describes.

    The attribute may be a ServiceDescriptor, an object with a ``desc()``
    method returning one (or a class building such an object), an iterable
    of those, or a zero-argument callable returning any of them.
    """
    module_name, _, attr_path = target.partition(":")
    if not module_name or not attr_path:
        raise ServiceLoadError(f"invalid target {target!r}, expected 'package.module:attribute'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ServiceLoadError(f"cannot import {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ServiceLoadError(f"{module_name!r} has no attribute {attr_path!r}") from e

    return _as_services(obj, target)


def _as_services(obj: Any, target: str) -> list[ServiceDescriptor]:
    if isinstance(obj, ServiceDescriptor):
        return [obj]
    if isinstance(obj, type):
        try:
            obj = obj()
        except TypeError as e:
            raise ServiceLoadError(f"cannot instantiate {target!r}: {e}") from e
        return _as_services(obj, target)
    if hasattr(obj, "desc") and callable(obj.desc):
        return _as_services(obj.desc(), target)
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes)):
        services = []
        for item in obj:
            services.extend(_as_services(item, target))
        return services
    if callable(obj):
        return _as_services(obj(), target)
    raise ServiceLoadError(f"{target!r} does not describe any service (got {type(obj).__name__})")
