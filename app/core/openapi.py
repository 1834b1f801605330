"""OpenAPI customization.

Documents the anonymous ``X-Owner-Id`` header as a security scheme on the
routes that are scoped to an owner, and adds tag descriptions.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from app.core.identity import OWNER_ID_HEADER

# (path suffix, method) pairs that require X-Owner-Id
OWNER_SCOPED_OPERATIONS = {
    ("/dreams", "post"),
    ("/rate-limit", "get"),
}

TAGS_METADATA = [
    {"name": "Dreams", "description": "Submit, list and translate dreams."},
    {"name": "Regions", "description": "Per-country aggregates over fuzzed dream locations."},
    {"name": "Identity", "description": "Anonymous owner ids and submission limits."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add the owner-id scheme and tags."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "OwnerId",
            {
                "type": "apiKey",
                "in": "header",
                "name": OWNER_ID_HEADER,
                "description": "Anonymous owner id issued by POST /v1/identity.",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            for method, operation in methods.items():
                if not isinstance(operation, dict):
                    continue
                if any(path.endswith(suffix) and method == m for suffix, m in OWNER_SCOPED_OPERATIONS):
                    operation["security"] = [{"OwnerId": []}]

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
