"""``bundle_info`` — example OSGi metadata for a JAR or MANIFEST.MF path.

The file is never opened; the report is canned example data keyed only on
the path's suffix.
"""

from __future__ import annotations

from typing import Any

from mcp_osgi.protocol.models import ToolDescriptor

DESCRIPTOR = ToolDescriptor(
    name="bundle_info",
    description=(
        "Analyze a JAR or MANIFEST.MF file and report its OSGi bundle metadata: "
        "symbolic name, version, required bundles, imported packages and required capabilities"
    ),
    input_schema={
        "type": "object",
        "properties": {
            "file": {
                "type": "string",
                "description": "Path to a JAR file or a META-INF/MANIFEST.MF file",
            },
        },
        "required": ["file"],
    },
)

BUNDLE_SUFFIXES = (".jar", "MANIFEST.MF")

_EXAMPLE_REPORT = """\
=== Bundle Information Analysis ===
File: {file}
Status: Valid OSGi Bundle

Bundle-SymbolicName: com.example.mybundle
Bundle-Version: 1.0.0.qualifier
Bundle-Name: Example Bundle
Bundle-Vendor: Example Corp
Bundle-RequiredExecutionEnvironment: JavaSE-17

Required Bundles:
- org.eclipse.osgi;bundle-version="3.18.0"
- org.eclipse.core.runtime;bundle-version="3.26.0"

Required Packages:
- org.osgi.framework;version="[1.10,2)"
- org.osgi.service.component.annotations;version="[1.5,2)"
- org.slf4j;version="[2.0,3)"

Required Capabilities:
- osgi.ee;filter:="(&(osgi.ee=JavaSE)(version=17))"
- osgi.extender;filter:="(&(osgi.extender=osgi.component)(version>=1.5)(!(version>=2.0)))"

Note: this is example output; the file was not inspected.
"""

_NOT_A_BUNDLE = """\
=== Bundle Information Analysis ===
File: {file}
Status: Not a bundle

Only JAR files and MANIFEST.MF files can carry OSGi bundle metadata.
"""


def is_bundle_path(path: str) -> bool:
    """True if *path* names something that could carry bundle headers."""
    return path.endswith(BUNDLE_SUFFIXES)


def bundle_info(arguments: dict[str, Any]) -> str:
    path = arguments.get("file")
    if not isinstance(path, str) or not path:
        msg = "'file' argument is required"
        raise ValueError(msg)

    if is_bundle_path(path):
        return _EXAMPLE_REPORT.format(file=path)
    return _NOT_A_BUNDLE.format(file=path)
