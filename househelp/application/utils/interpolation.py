from __future__ import annotations

from typing import Any, Mapping


def interpolate(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Substitute {{name}} placeholders. Unknown placeholders are left as they are."""
    for name, value in (params or {}).items():
        template = template.replace(f"{{{{{name}}}}}", str(value))
    return template
