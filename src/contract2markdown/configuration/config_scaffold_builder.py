"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "contract2markdown.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generation configuration template for contract2markdown.
# Every value is optional; command line options override what is set here.
# Commented-out entries are examples; uncomment and edit the ones you need.

output:
  # Folder for the generated Markdown files, relative to this file.
  directory: "output_md"
  # Standalone schema pages: none, single (Schemas.md) or independent (schemas/<Name>.md).
  schema_pages: "none"

metadata:
  # Every key/value pair is written as YAML front matter on each generated page.
  # product: "Pet Store"
  # audience: "internal"

generation:
  # Number of operation pages rendered concurrently.
  parallelism: 4
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generation configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
