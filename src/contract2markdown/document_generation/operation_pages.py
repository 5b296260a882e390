"""Operation page rendering service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from contract2markdown.contract_loading import ContractDocument
from contract2markdown.schema_rendering import (
    ExpansionCache,
    ReferenceResolutionError,
    collect_model_references,
    compute_reference_closure,
    is_model_reference,
    reference_display_name,
    reference_target,
    resolve_reference,
)

from .generated_files import GeneratedFile, GeneratedFileType, OperationIndexEntry
from .markdown_blocks import front_matter_lines, join_lines, safe_file_name, schema_block_lines

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options", "trace")


@dataclass(frozen=True)
class ContractOperation:
    """One ``paths.<path>.<method>`` entry of the contract."""

    path: str
    method: str
    definition: Mapping[str, Any]
    path_item: Mapping[str, Any]

    @property
    def operation_id(self) -> str | None:
        return _optional_text(self.definition.get("operationId"))

    @property
    def summary(self) -> str | None:
        return _optional_text(self.definition.get("summary"))

    @property
    def description(self) -> str | None:
        return _optional_text(self.definition.get("description"))

    @property
    def friendly_name(self) -> str:
        return self.summary or self.operation_id or f"{self.method} {self.path}"

    @property
    def base_file_name(self) -> str:
        stem = self.operation_id or f"{self.method}_{self.path}"
        return safe_file_name(f"{stem}.md")


def list_operations(contract: ContractDocument) -> list[ContractOperation]:
    """Return every documented operation in declaration order."""
    operations: list[ContractOperation] = []
    for path, path_item in contract.paths.items():
        if not isinstance(path_item, Mapping):
            logger.debug("Skipping path %s: not a mapping", path)
            continue
        for method, definition in path_item.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(definition, Mapping):
                logger.debug("Skipping %s %s: operation is not a mapping", method, path)
                continue
            operations.append(
                ContractOperation(
                    path=str(path),
                    method=method.upper(),
                    definition=definition,
                    path_item=path_item,
                )
            )
    return operations


def build_operation_page(
    contract: ContractDocument,
    operation: ContractOperation,
    *,
    metadata: Mapping[str, str],
    cache: ExpansionCache | None,
    file_name: str | None = None,
) -> GeneratedFile:
    """Render the Markdown page documenting one operation and the models it uses."""
    builder = _OperationPageBuilder(contract, operation, cache)
    content = builder.render(metadata)
    resolved_file_name = file_name or operation.base_file_name
    return GeneratedFile(
        file_name=resolved_file_name,
        content=content,
        file_type=GeneratedFileType.OPERATION,
        metadata={
            "Method": operation.method,
            "Path": operation.path,
            "OperationId": operation.operation_id or "",
            "FriendlyName": operation.friendly_name,
        },
    )


def operation_index_entry(operation: ContractOperation, file_name: str) -> OperationIndexEntry:
    return OperationIndexEntry(
        file_name=file_name,
        method=operation.method,
        path=operation.path,
        operation_id=operation.operation_id or "",
        friendly_name=operation.friendly_name,
    )


class _OperationPageBuilder:
    """Accumulates the lines of one operation page and the models it references."""

    def __init__(
        self,
        contract: ContractDocument,
        operation: ContractOperation,
        cache: ExpansionCache | None,
    ) -> None:
        self._contract = contract
        self._root = contract.root
        self._operation = operation
        self._cache = cache
        self._lines: list[str] = []
        self._seeds: list[str] = []

    def render(self, metadata: Mapping[str, str]) -> str:
        self._lines.extend(front_matter_lines(metadata))
        self._write_header()
        parameters = self._resolved_parameters()
        self._write_parameters(parameters)
        self._write_request_body(
            [parameter for parameter in parameters if parameter.get("in") == "body"]
        )
        self._write_responses()
        self._write_models()
        return join_lines(self._lines)

    def _write_header(self) -> None:
        operation = self._operation
        friendly_name = operation.friendly_name
        operation_id = operation.operation_id or ""
        self._lines.extend(
            [
                f"# {self._contract.title} {friendly_name}",
                "",
                f"{friendly_name} {operation_id} {operation.method} {operation.path}",
                "",
                f"- Friendly name: {friendly_name}",
                f"- Operation ID: {operation_id}",
                f"- HTTP Method: {operation.method}",
                f"- Path: {operation.path}",
                "",
            ]
        )
        if operation.description:
            self._lines.extend([operation.description, ""])

    def _resolved_parameters(self) -> list[Mapping[str, Any]]:
        path_level = self._parameter_list(self._operation.path_item.get("parameters"))
        operation_level = self._parameter_list(self._operation.definition.get("parameters"))
        overridden = {_parameter_identity(parameter) for parameter in operation_level}
        inherited = [
            parameter
            for parameter in path_level
            if _parameter_identity(parameter) not in overridden
        ]
        return inherited + operation_level

    def _parameter_list(self, raw: Any) -> list[Mapping[str, Any]]:
        if not isinstance(raw, Sequence) or isinstance(raw, str):
            return []
        return [
            resolved
            for resolved in (self._resolve_parameter(item) for item in raw)
            if resolved is not None
        ]

    def _resolve_parameter(self, parameter: Any) -> Mapping[str, Any] | None:
        if not isinstance(parameter, Mapping):
            return None
        pointer = reference_target(parameter)
        if pointer is None:
            return parameter

        resolved = self._resolve_or_none(pointer)
        if not isinstance(resolved, Mapping):
            resolved = {}
        if "name" not in resolved and pointer.lower().endswith("/schema"):
            parent = self._resolve_or_none(pointer[: -len("/schema")])
            if isinstance(parent, Mapping):
                resolved = parent
        if not _optional_text(resolved.get("name")):
            resolved = {**resolved, "name": reference_display_name(pointer)}
        return resolved

    def _write_parameters(self, parameters: list[Mapping[str, Any]]) -> None:
        self._lines.extend(["## Parameters", ""])
        if not parameters:
            self._lines.append("No parameters.")
        for parameter in parameters:
            self._lines.append(_parameter_line(parameter))
        self._lines.append("")

    def _write_request_body(self, body_parameters: list[Mapping[str, Any]]) -> None:
        self._lines.extend(["## Request body", ""])
        request_body = self._dereference(self._operation.definition.get("requestBody"))
        if isinstance(request_body, Mapping):
            description = _optional_text(request_body.get("description"))
            if description:
                self._lines.append(description)
            self._write_media_content(request_body.get("content"))
        elif body_parameters:
            # Swagger 2 carries the request body as an ``in: body`` parameter.
            for parameter in body_parameters:
                description = _optional_text(parameter.get("description"))
                if description:
                    self._lines.append(description)
                for media_type in self._consumed_media_types():
                    self._lines.append(f"- Content: {media_type}")
                if "schema" in parameter:
                    self._write_body_schema(parameter["schema"])
        else:
            self._lines.append("No request body.")
        self._lines.append("")

    def _write_responses(self) -> None:
        self._lines.extend(["## Response", ""])
        responses = self._operation.definition.get("responses")
        if not isinstance(responses, Mapping) or not responses:
            self._lines.extend(["No responses defined.", ""])
            return

        for status, raw_response in responses.items():
            self._lines.extend([f"### {status}", ""])
            response = self._dereference(raw_response)
            if not isinstance(response, Mapping):
                self._lines.append("")
                continue
            description = _optional_text(response.get("description"))
            if description:
                self._lines.append(description)
            if isinstance(response.get("content"), Mapping):
                self._write_media_content(response["content"])
            elif "schema" in response:
                self._write_body_schema(response["schema"])
            self._lines.append("")

    def _write_media_content(self, content: Any) -> None:
        if not isinstance(content, Mapping):
            return
        for media_type, media in content.items():
            self._lines.append(f"- Content: {media_type}")
            if isinstance(media, Mapping) and "schema" in media:
                self._write_body_schema(media["schema"])

    def _write_body_schema(self, schema: Any) -> None:
        self._seeds.extend(collect_model_references(schema, every_spelling=True))
        target = reference_target(schema)
        self._lines.append("")
        if target is not None and is_model_reference(target):
            name = reference_display_name(target)
            self._lines.append(f"- Schema: {name} (see model section below)")
            return
        self._lines.extend(
            schema_block_lines(schema, self._root, self._cache, expand_refs_inline=False)
        )

    def _write_models(self) -> None:
        for reference in compute_reference_closure(self._root, self._seeds):
            model = resolve_reference(self._root, reference)
            name = reference_display_name(reference)
            self._lines.extend([f"## Model: {name}", f'<a id="{name}"></a>', ""])
            self._lines.extend(
                schema_block_lines(model, self._root, self._cache, expand_refs_inline=False)
            )
            self._lines.append("")

    def _consumed_media_types(self) -> list[str]:
        for source in (self._operation.definition, self._root):
            consumes = source.get("consumes")
            if isinstance(consumes, Sequence) and not isinstance(consumes, str) and consumes:
                return [str(media_type) for media_type in consumes]
        return []

    def _dereference(self, node: Any) -> Any:
        target = reference_target(node)
        if target is None:
            return node
        resolved = self._resolve_or_none(target)
        return node if resolved is None else resolved

    def _resolve_or_none(self, reference: str) -> Any:
        try:
            return resolve_reference(self._root, reference)
        except ReferenceResolutionError as exc:
            logger.debug(
                "Unresolved reference in %s %s: %s",
                self._operation.method,
                self._operation.path,
                exc,
            )
            return None


def _parameter_line(parameter: Mapping[str, Any]) -> str:
    name = _optional_text(parameter.get("name")) or ""
    location = _optional_text(parameter.get("in")) or ""
    requirement = "required" if parameter.get("required") is True else "optional"
    description = _optional_text(parameter.get("description"))
    short_type = _schema_short_name(parameter.get("schema"))
    if not short_type:
        short_type = _optional_text(parameter.get("type")) or ""

    details = f"{location}, {short_type}" if short_type else location
    line = f"- **{name}** ({details}) - {requirement}"
    return f"{line}: {description}" if description else line


def _schema_short_name(schema: Any) -> str:
    if not isinstance(schema, Mapping):
        return ""
    target = reference_target(schema)
    if target is not None:
        return reference_display_name(target)
    schema_type = schema.get("type")
    return schema_type if isinstance(schema_type, str) else ""


def _parameter_identity(parameter: Mapping[str, Any]) -> tuple[str, str]:
    return str(parameter.get("name", "")), str(parameter.get("in", ""))


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None
