#!/usr/bin/env python
import os

from sdk.pystore import StoreAPIError, StoreClient


def main():
    c = StoreClient(
        base_url=os.getenv("STORE_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "demo-api-key-123"),
    )

    # -----------------------------
    # Browse
    # -----------------------------
    print("Endpoints:")
    print(c.index())

    print("\nElectronics in stock, 2 per page...")
    print(c.list_products(category="electronics", in_stock=True, limit=2))

    print("\nSearching for 'laptop'...")
    print(c.search_products("laptop"))

    print("\nStats...")
    print(c.stats())

    # -----------------------------
    # Create / update / delete
    # -----------------------------
    print("\nCreating a product...")
    created = c.create_product("Standing Desk", "Height-adjustable desk", 450, "furniture", True)
    print(created)
    pid = created["product"]["id"]

    print("\nMarking it out of stock...")
    print(c.update_product(pid, "Standing Desk", "Height-adjustable desk", 450, "furniture", False))

    print("\nDeleting it...")
    print(c.delete_product(pid))

    # -----------------------------
    # Errors
    # -----------------------------
    print("\nFetching it again...")
    try:
        c.get_product(pid)
    except StoreAPIError as e:
        print(e)

    print("\nCreating without an API key...")
    try:
        StoreClient(base_url=c.base_url).create_product("X", "Y", 1, "misc")
    except StoreAPIError as e:
        print(e)


if __name__ == "__main__":
    main()
