"""Adapter for the older ``(route, class_name, object_id)`` request style."""

from typing import Any, Dict, Mapping, Optional, Tuple


def build_legacy_path(
    route: Optional[str] = None,
    class_name: Optional[str] = None,
    object_id: Optional[str] = None,
) -> str:
    """Join the present segments, e.g. ``/classes/Post/<id>``."""
    return ''.join(f'/{segment}' for segment in (route, class_name, object_id) if segment)


def adapt_method(
    method: Optional[str],
    data: Any,
    query: Optional[Mapping[str, Any]],
) -> Tuple[Any, Optional[Dict[str, Any]]]:
    """Move the body of a GET request into its query.

    Keys already present in ``query`` win over keys coming from ``data``.

    Returns:
        ``(data, query)``; data is None for GET requests
    """
    if method and method.lower() == 'get':
        merged: Dict[str, Any] = dict(data or {})
        merged.update(query or {})
        return None, merged
    return data, dict(query) if query is not None else None
