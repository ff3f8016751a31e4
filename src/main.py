"""
Example usage of the pycatalog library.
"""

from pathlib import Path

from pycatalog import SchemaInspector


def main():
    """Demonstrate pycatalog library usage."""
    # Catalog rows captured from INFORMATION_SCHEMA.COLUMNS
    catalog_path = Path(__file__).parent.parent / "resources" / "shop_catalog.json"

    try:
        with SchemaInspector.connect(catalog_path) as inspector:
            print("Successfully loaded catalog!")
            print(f"Available databases: {inspector.get_databases()}")

            database_name = inspector.get_databases()[0]
            tables = inspector.get_table_names(database_name)
            print(f"\nFound {len(tables)} tables in {database_name}")

            if tables:
                first_table = inspector.get_table_info(database_name, tables[0])
                print(f"\nColumns of {first_table.name}:")
                for column in first_table.get_columns():
                    print(f"  {column.column_definition()}")

                print("\nCREATE TABLE statements:")
                print(inspector.render(database_name, "sql", engine="InnoDB"))

                print("\nRecord classes:")
                print(inspector.render(database_name, "dataclass"))

    except Exception as e:
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
