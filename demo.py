#!/usr/bin/env python
import asyncio
import os

from sdk.productapi import ProductClient, ProductApiError


def main():
    c = ProductClient(base_url="http://127.0.0.1:3000", api_key=os.environ.get("API_KEY", "secret-api-key"))

    # -----------------------------
    # List seeded products
    # -----------------------------
    print("Listing products...")
    print(c.list_products())

    # -----------------------------
    # Create a product
    # -----------------------------
    print("\nCreating 'Kettle'...")
    kettle = c.create_product("Kettle", 30)
    print(kettle)

    print("\nCreating 'Teapot' with the async client...")
    teapot = asyncio.run(c.create_product_async("Teapot", 25, category="kitchen"))
    print(teapot)

    # -----------------------------
    # Filter, search and paginate
    # -----------------------------
    print("\nElectronics, one per page...")
    print(c.list_products(category="electronics", page=1, limit=1))
    print("\nSearching for 'coffee'...")
    print(c.list_products(search="coffee"))

    # -----------------------------
    # Update
    # -----------------------------
    print("\nRepricing the smartphone...")
    print(c.update_product("2", price=750))
    print("\nMoving the kettle to 'kitchen'...")
    print(c.update_product(kettle["id"], category="kitchen"))

    # -----------------------------
    # Stats
    # -----------------------------
    print("\nStatistics...")
    print(c.get_stats())

    # -----------------------------
    # Delete
    # -----------------------------
    print("\nDeleting the kettle...")
    c.delete_product(kettle["id"])
    try:
        c.get_product(kettle["id"])
    except ProductApiError as e:
        print(f"Lookup after delete: {e}")

    # -----------------------------
    # Bad credentials
    # -----------------------------
    print("\nUsing a wrong API key...")
    try:
        ProductClient(base_url=c.base_url, api_key="wrong").list_products()
    except ProductApiError as e:
        print(e)


if __name__ == "__main__":
    main()
