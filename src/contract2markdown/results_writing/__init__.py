"""Results writing domain exports."""

from .markdown_file_writer import write_generated_files

__all__ = ["write_generated_files"]
