"""Document generation exports."""

from .component_pages import (
    COMPONENTS_FILE_NAME,
    SCHEMAS_FILE_NAME,
    build_components_page,
    build_schema_pages,
)
from .document_assembly import (
    assign_operation_file_names,
    expected_file_count,
    generate_documents,
)
from .generated_files import (
    GeneratedFile,
    GeneratedFileType,
    OperationIndexEntry,
    SchemaIndexEntry,
)
from .index_page import INDEX_FILE_NAME, build_index_page
from .operation_pages import ContractOperation, build_operation_page, list_operations

__all__ = [
    "COMPONENTS_FILE_NAME",
    "INDEX_FILE_NAME",
    "SCHEMAS_FILE_NAME",
    "ContractOperation",
    "GeneratedFile",
    "GeneratedFileType",
    "OperationIndexEntry",
    "SchemaIndexEntry",
    "assign_operation_file_names",
    "build_components_page",
    "build_index_page",
    "build_operation_page",
    "build_schema_pages",
    "expected_file_count",
    "generate_documents",
    "list_operations",
]
