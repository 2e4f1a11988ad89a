#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from sdkgen.runtime import (
    DefaultHttpClient,
    FailurePolicy,
    HttpClientConfig,
    HttpMethod,
    OperationRunner,
    OperationSpec,
    PropertySpec,
    RestError,
    SerializationOptions,
    TypeSpecRegistry,
    composite_spec,
    enum_spec,
    number_spec,
    sequence_spec,
    string_spec,
)

registry = TypeSpecRegistry()
registry.register(
    "Category",
    composite_spec("Category", {"id": PropertySpec(number_spec), "name": PropertySpec(string_spec)}),
)
registry.register(
    "Pet",
    composite_spec(
        "Pet",
        {
            "id": PropertySpec(number_spec),
            "name": PropertySpec(string_spec, required=True),
            "category": PropertySpec("Category"),
            "photo_urls": PropertySpec(sequence_spec(string_spec), serialized_name="photoUrls"),
            "status": PropertySpec(enum_spec("PetStatus", ["available", "pending", "sold"])),
        },
    ),
)

FIND_BY_STATUS = OperationSpec(
    http_method=HttpMethod.GET,
    path="/pet/findByStatus",
    query_parameters={"status": string_spec},
    responses={200: sequence_spec("Pet")},
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List pets from the public Swagger petstore")
    p.add_argument("status", nargs="?", default="available")
    p.add_argument("limit", nargs="?", type=int, default=10)
    p.add_argument("--base-url", default="https://petstore.swagger.io/v2")
    p.add_argument("--strict", action="store_true", help="fail on off-schema data")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.WARNING)

    options = SerializationOptions(
        registry=registry,
        failure_policy=FailurePolicy.THROW if args.strict else FailurePolicy.WARN,
    )
    async with DefaultHttpClient(HttpClientConfig(timeout=10)) as client:
        runner = OperationRunner(client, args.base_url, options)
        try:
            response = await runner.run(FIND_BY_STATUS, {"status": args.status})
        except RestError as e:
            print(f"Request failed: {e} (code={e.code}, status={e.status_code})")
            return

    pets = response.parsed_body or []
    print("=" * 65)
    print(f"Status     : {args.status}")
    print(f"Pets count : {len(pets)}")
    print("=" * 65)
    for pet in pets[: args.limit]:
        category = (pet.get("category") or {}).get("name", "-")
        print(f"{str(pet.get('id')):>20} | {str(pet.get('name')):25} | {category}")
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
