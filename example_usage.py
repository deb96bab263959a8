#!/usr/bin/env python3
"""
Basic usage examples for the Veritas Python client library.

Runs a few data and counter operations against a Veritas endpoint. The
endpoint and credentials are read from the environment.
"""

import logging
import os
import sys

from veritas_client import LOG_TRACE, LOG_WARN, VeritasClient, VeritasClientError


def main():
    """Run basic usage examples."""

    endpoint = os.environ.get("VERITAS_ENDPOINT", "http://localhost:8080")
    customer_id = int(os.environ.get("VERITAS_CUSTOMER_ID", "1"))
    application_id = int(os.environ.get("VERITAS_APPLICATION_ID", "1"))
    secret_token = os.environ.get("VERITAS_TOKEN", "demo-secret")
    log_level = LOG_TRACE if os.environ.get("VERITAS_TRACE") else LOG_WARN

    print("=== Veritas Python Client Basic Usage Examples ===\n")

    with VeritasClient(customer_id, application_id, secret_token,
                       endpoint=endpoint, log_level=log_level) as client:
        client.select("demo")
        client.print_debug()

        try:
            print("1. Storing a value...")
            response = client.put_single("users", "user-1", "name", "Ada")
            print(f"   {'✓' if response.success else '✗'} put_single (mutations: {response.mutation_count})")

            print("2. Reading it back...")
            response = client.get_single("users", "user-1", "name")
            if response.success:
                print(f"   ✓ name = {response.data_value()}")
            else:
                print(f"   ✗ get_single failed: {response.raw_body}")

            print("3. Bulk write across keys...")
            response = client.put_multi("users", {
                "user-1": {"email": "ada@example.com"},
                "user-2": {"name": "Grace", "email": "grace@example.com"},
            })
            print(f"   {'✓' if response.success else '✗'} put_multi")

            print("4. Bulk read...")
            response = client.get_multi("users", {"user-1": ["name", "email"], "user-2": ["name"]})
            for key, values in response.data_map_values().items():
                print(f"   {key}: {values}")

            print("5. Counters...")
            client.increment_single_count("stats", "page-home", "views", 1)
            response = client.get_single_count("stats", "page-home", "views")
            print(f"   views = {response.count_value()}")

            print("6. Cleaning up...")
            response = client.delete_multi("users", {"user-1": ["name", "email"], "user-2": ["name", "email"]})
            print(f"   {'✓' if response.success else '✗'} delete_multi")

        except VeritasClientError as e:
            print(f"Veritas Client Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    # Trace output is emitted at DEBUG
    logging.basicConfig(level=logging.DEBUG if os.environ.get("VERITAS_TRACE") else logging.INFO)
    main()
