"""Operation builder: one Swagger operation per contract and REST selector."""

import logging
from http import HTTPStatus

from swagger_gen.desc.base import Contract, RestSelector
from swagger_gen.generator.definitions import DefinitionBuilder
from swagger_gen.generator.fields import record_type_of
from swagger_gen.generator.params import classify_parameters
from swagger_gen.generator.paths import RoutePattern
from swagger_gen.spec.models import (
    Operation,
    PathItem,
    Response,
    body_param,
    ref_property,
)

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
BODY_METHODS = ("POST", "PUT", "PATCH")


class OperationBuilder:
    """Adds the operations of contracts to a document's path items."""

    def __init__(self, definitions: DefinitionBuilder, tag_name: str):
        self.definitions = definitions
        self.tag_name = tag_name

    def add_contract(self, paths: dict[str, PathItem], service_name: str, contract: Contract) -> None:
        errors = self._error_responses(contract)

        for selector in contract.selectors:
            if not isinstance(selector, RestSelector):
                logger.debug("contract %r: skipping non-REST selector %r", contract.name, selector)
                continue
            method = selector.method.upper()
            if method not in METHODS:
                logger.debug("contract %r: skipping unsupported method %s", contract.name, method)
                continue

            pattern = RoutePattern.parse(selector.path)
            op = self.build_operation(service_name, contract, method, pattern, errors)
            item = paths.setdefault(pattern.to_swagger(), PathItem())
            setattr(item, method.lower(), op)

    def build_operation(
        self,
        service_name: str,
        contract: Contract,
        method: str,
        pattern: RoutePattern,
        errors: dict[int, Response],
    ) -> Operation:
        op = Operation(
            operation_id=contract.name or None,
            tags=[service_name],
            consumes=[JSON_CONTENT_TYPE],
            produces=[JSON_CONTENT_TYPE],
        )

        ok = Response(description=HTTPStatus.OK.phrase)
        if contract.output is not None:
            ok.body_schema = ref_property(self.definitions.add(contract.output))
        op.responds_with(HTTPStatus.OK.value, ok)
        for code, response in errors.items():
            op.responds_with(code, response.model_copy(deep=True))

        if contract.input is not None:
            in_type = record_type_of(contract.input)
            for param in classify_parameters(pattern, in_type, self.tag_name):
                op.add_param(param)
            in_name = self.definitions.add(in_type)
            if method in BODY_METHODS:
                op.add_param(body_param(in_name, ref_property(in_name)))

        return op

    def _error_responses(self, contract: Contract) -> dict[int, Response]:
        """One response per status code, listing every error item sharing it."""
        items: dict[int, list[str]] = {}
        responses: dict[int, Response] = {}
        for pe in contract.possible_errors:
            name = self.definitions.add(pe.message)
            items.setdefault(pe.code, []).append(pe.item)
            responses[pe.code] = Response(
                description=f"Items: {', '.join(items[pe.code])}",
                body_schema=ref_property(name),
            )
        return responses
