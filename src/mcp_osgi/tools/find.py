"""``find`` — canned OSGi repository search results."""

from __future__ import annotations

from typing import Any

from mcp_osgi.protocol.models import ToolDescriptor

SEARCH_TYPES = ("package", "bundle", "capability")

DESCRIPTOR = ToolDescriptor(
    name="find",
    description=(
        "Search OSGi repositories for a package, bundle, or capability and "
        "list the bundles that provide it with download URLs"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "type": {
                "type": "string",
                "enum": list(SEARCH_TYPES),
                "description": "What to search for: package, bundle, or capability",
            },
            "name": {
                "type": "string",
                "description": "Package name, bundle symbolic name, or capability namespace",
            },
        },
        "required": ["type", "name"],
    },
)

_REPOSITORY = "https://repo1.maven.org/maven2"

# (bundle symbolic name, version, maven path)
_EXAMPLE_HITS = [
    ("org.eclipse.osgi", "3.18.600", "org/eclipse/platform/org.eclipse.osgi/3.18.600/org.eclipse.osgi-3.18.600.jar"),
    ("org.apache.felix.framework", "7.0.5", "org/apache/felix/org.apache.felix.framework/7.0.5/org.apache.felix.framework-7.0.5.jar"),
]


def find(arguments: dict[str, Any]) -> str:
    search_type = arguments.get("type")
    name = arguments.get("name")
    if search_type not in SEARCH_TYPES:
        msg = f"'type' must be one of {', '.join(SEARCH_TYPES)}"
        raise ValueError(msg)
    if not isinstance(name, str) or not name:
        msg = "'name' argument is required"
        raise ValueError(msg)

    lines = [
        "=== OSGi Repository Search ===",
        f"Search Type: {search_type}",
        f"Search Name: {name}",
        "",
        f"Found {len(_EXAMPLE_HITS)} result(s):",
    ]
    for index, (bsn, version, path) in enumerate(_EXAMPLE_HITS, start=1):
        lines.append("")
        lines.append(f"{index}. Bundle: {bsn}")
        lines.append(f"   Version: {version}")
        if search_type == "package":
            lines.append(f'   Exports Package: {name};version="{version}"')
        elif search_type == "capability":
            lines.append(f"   Provides Capability: {name}")
        lines.append(f"   Download URL: {_REPOSITORY}/{path}")

    lines.append("")
    lines.append("Note: these are example results; no repository was queried.")
    return "\n".join(lines) + "\n"
