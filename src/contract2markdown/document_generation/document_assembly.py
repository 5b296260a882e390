"""Document generation use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from contract2markdown.configuration import Configuration, SchemaPageLayout
from contract2markdown.contract_loading import ContractDocument
from contract2markdown.schema_rendering import ExpansionCache

from .component_pages import build_components_page, build_schema_pages
from .generated_files import GeneratedFile
from .index_page import build_index_page
from .operation_pages import (
    ContractOperation,
    build_operation_page,
    list_operations,
    operation_index_entry,
)

logger = logging.getLogger(__name__)

FileCallback = Callable[[GeneratedFile], None]


def generate_documents(
    contract: ContractDocument,
    configuration: Configuration,
    *,
    cache: ExpansionCache | None = None,
    on_file_generated: FileCallback | None = None,
) -> list[GeneratedFile]:
    """Render every Markdown page for ``contract`` without touching the filesystem.

    Operation pages are rendered concurrently and share one expansion cache;
    they are returned in declaration order, followed by the components page,
    the optional schema pages and the index page.
    """
    run_cache = cache if cache is not None else ExpansionCache()
    metadata = configuration.metadata
    notify = on_file_generated or _ignore_file

    operations = list_operations(contract)
    file_names = assign_operation_file_names(operations)
    files = _render_operation_pages(
        contract,
        operations,
        file_names,
        metadata=metadata,
        cache=run_cache,
        parallelism=configuration.generation.parallelism,
        notify=notify,
    )

    components_page = build_components_page(contract, metadata=metadata, cache=run_cache)
    if components_page is not None:
        files.append(components_page)
        notify(components_page)

    schema_pages, schema_entries = build_schema_pages(
        contract, configuration.output.schema_pages, metadata=metadata, cache=run_cache
    )
    for page in schema_pages:
        files.append(page)
        notify(page)

    index_page = build_index_page(
        contract.title,
        [
            operation_index_entry(operation, file_name)
            for operation, file_name in zip(operations, file_names)
        ],
        schema_entries,
        metadata=metadata,
    )
    files.append(index_page)
    notify(index_page)

    logger.info(
        "Rendered %d files for %d operations (%d cached expansions)",
        len(files),
        len(operations),
        len(run_cache),
    )
    return files


def expected_file_count(contract: ContractDocument, configuration: Configuration) -> int:
    """Return how many files :func:`generate_documents` will produce."""
    schema_count = len(contract.named_schemas())
    total = len(list_operations(contract)) + 1
    if schema_count:
        total += 1
        if configuration.output.schema_pages is SchemaPageLayout.SINGLE:
            total += 1
        elif configuration.output.schema_pages is SchemaPageLayout.INDEPENDENT:
            total += schema_count
    return total


def assign_operation_file_names(operations: Sequence[ContractOperation]) -> list[str]:
    """Return one file name per operation, suffixing duplicates with ``_2``, ``_3``..."""
    taken: set[str] = set()
    names: list[str] = []
    for operation in operations:
        candidate = operation.base_file_name
        stem = candidate[: -len(".md")]
        counter = 2
        while candidate.casefold() in taken:
            candidate = f"{stem}_{counter}.md"
            counter += 1
        taken.add(candidate.casefold())
        names.append(candidate)
    return names


def _render_operation_pages(
    contract: ContractDocument,
    operations: Sequence[ContractOperation],
    file_names: Sequence[str],
    *,
    metadata: Mapping[str, str],
    cache: ExpansionCache,
    parallelism: int,
    notify: FileCallback,
) -> list[GeneratedFile]:
    pages: list[GeneratedFile | None] = [None] * len(operations)
    with ThreadPoolExecutor(max_workers=max(1, parallelism)) as executor:
        futures = {
            executor.submit(
                build_operation_page,
                contract,
                operation,
                metadata=metadata,
                cache=cache,
                file_name=file_name,
            ): position
            for position, (operation, file_name) in enumerate(zip(operations, file_names))
        }
        for future in as_completed(futures):
            page = future.result()
            pages[futures[future]] = page
            notify(page)
    return [page for page in pages if page is not None]


def _ignore_file(_: GeneratedFile) -> None:
    return None
