"""
API Composer.

Each endpoint declared under `apis` becomes one create request:

    apis:
        hello-world:                  # api name
            hello:                    # base path
                world:                # relative path
                    greeting: GET     # action: method, or {method, response}
"""

from __future__ import annotations

from typing import Any

from wskcompose.schemas.manifest import PackageSpec
from wskcompose.whisk.entities import Api, ApiAction, ApiCreateRequest

DEFAULT_RESPONSE_TYPE = "json"


def _operation(value: Any) -> tuple[str, str]:
    if isinstance(value, dict):
        return str(value.get("method", "")), str(value.get("response") or DEFAULT_RESPONSE_TYPE)
    return str(value), DEFAULT_RESPONSE_TYPE


def get_apis(pkg: PackageSpec) -> list[Api]:
    apis = []
    for api_name, base_paths in pkg.apis.items():
        for base_path, rel_paths in base_paths.items():
            for rel_path, operations in rel_paths.items():
                for action_name, operation in operations.items():
                    method, response = _operation(operation)
                    apis.append(
                        Api(
                            api_name=api_name,
                            gateway_base_path=base_path,
                            gateway_rel_path=rel_path,
                            gateway_method=method.upper(),
                            action=ApiAction(name=action_name, backend_method=method.upper()),
                            response_type=response,
                        )
                    )
    return apis


def compose_api_records(pkg: PackageSpec) -> list[ApiCreateRequest]:
    return [ApiCreateRequest(api_doc=api) for api in get_apis(pkg)]
