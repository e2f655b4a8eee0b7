#!/usr/bin/env python
from sdk.pycatalog import CatalogAPIError, CatalogClient


def main():
    c = CatalogClient()

    # -----------------------------
    # List products
    # -----------------------------
    print("Listing products...")
    products = c.list_products()
    print(f"{len(products)} products")
    print("Categories:", c.list_categories())

    # -----------------------------
    # Create a product
    # -----------------------------
    print("\nCreating 'Tea'...")
    tea = c.create_product("Tea", 50, category="Drinks")
    print(tea)

    # -----------------------------
    # Filter and search
    # -----------------------------
    print("\nDrinks:")
    print([p["title"] for p in c.list_products(category="Drinks")])
    print("\nSearching for 'tea'...")
    print(c.list_products(q="tea"))

    # -----------------------------
    # Validation errors
    # -----------------------------
    print("\nCreating an invalid product...")
    try:
        c.create_product("", -1, category="Drinks")
    except CatalogAPIError as e:
        print(e.status_code, e.body)

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nRestocking 'Tea'...")
    print(c.update_product(tea["id"], stock=40, rating=4.5))

    print("\nDeleting 'Tea'...")
    c.delete_product(tea["id"])
    try:
        c.get_product(tea["id"])
    except CatalogAPIError as e:
        print(e.status_code, e.body)


if __name__ == "__main__":
    main()
