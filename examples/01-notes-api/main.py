"""
Notes API Example

This example demonstrates the basic construct pattern:
1. Load a declaration from YAML
2. Build the API against the in-memory provider
3. Add a resolver and permissions afterwards
4. Inspect the wired resources

Run: python examples/01-notes-api/main.py
"""

import json
from pathlib import Path

from graphwire import AppSyncApi, InMemoryResourceProvider, configure_logging, load_api_props

HERE = Path(__file__).parent


def main():
    configure_logging("INFO")

    props = load_api_props(HERE / "api.yaml")
    props.schema_ = [str(path) for path in sorted((HERE / "schema").glob("*.graphql"))]

    provider = InMemoryResourceProvider()
    api = AppSyncApi("stack", "NotesApi", props, provider=provider)

    # Added later; still receives the global grant below
    api.attach_permissions(["s3:GetObject"])
    api.add_resolvers("stack", {"Mutation charge": "src/billing.main"})
    api.attach_permissions_to_data_source("Mutation charge", ["secretsmanager:GetSecretValue"])

    print(f"API: {api}")
    print(f"Schema: {api.graphql_api.schema}")
    print()

    for function in provider.functions:
        print(f"Function: {function.function_name}")
        print(f"  handler: {function.props.handler}")
        print(f"  timeout: {function.props.timeout}")
        print(f"  permissions: {function.permissions}")
    print()

    for resolver in provider.resolvers:
        print(f"Resolver: {resolver.type_name}.{resolver.field_name} -> {resolver.data_source.key}")
    print()

    print(json.dumps(api.get_construct_metadata(), indent=2))


if __name__ == "__main__":
    main()
