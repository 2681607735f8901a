#!/usr/bin/env python3
"""
Basic Usage Example for schemagen

This example demonstrates:
1. Building table models from a SQLite catalog
2. Filtering tables and routing inherited columns
3. Reading diagnostics and exporting the models
"""
import sqlite3
import sys
import os

# Add src to path for local development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from schemagen import (
    DatabaseType,
    DataSourceConfig,
    FieldFill,
    GlobalConfig,
    MySqlKeyWordsHandler,
    SchemaModelBuilder,
    StrategyConfig,
    TableFill,
    export_table_models,
    setup_logging,
)


def main():
    # Setup logging
    setup_logging(level="INFO")

    print("=" * 60)
    print("schemagen - Basic Usage Example")
    print("=" * 60)

    print("\n1. Creating test catalog...")
    connection = sqlite3.connect(":memory:")
    connection.executescript("""
        CREATE TABLE t_user (
            id INTEGER PRIMARY KEY,
            user_name TEXT NOT NULL,
            email TEXT,
            create_time TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            update_time TIMESTAMP,
            version INTEGER DEFAULT 0
        );
        CREATE TABLE t_order (
            id INTEGER PRIMARY KEY,
            user_id INTEGER REFERENCES t_user(id),
            "desc" TEXT,
            amount DECIMAL(10, 2),
            create_time TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        CREATE TABLE flyway_schema_history (installed_rank INTEGER PRIMARY KEY);
        CREATE VIEW v_user_order AS SELECT u.user_name, o.amount FROM t_user u JOIN t_order o ON o.user_id = u.id;
    """)

    print("2. Configuring the build...")
    data_source = DataSourceConfig(
        db_type=DatabaseType.SQLITE,
        connection=connection,
        keywords_handler=MySqlKeyWordsHandler(),
    )
    strategy = StrategyConfig(
        exclude={"flyway_schema_history", "missing_table"},
        skip_view=True,
        table_prefix=["t_"],
        super_entity_columns={"createTime", "updateTime"},
        version_field_name="version",
        table_fill_list=[
            TableFill(field_name="create_time", field_fill=FieldFill.INSERT),
            TableFill(field_name="update_time", field_fill=FieldFill.INSERT_UPDATE),
        ],
    )
    global_config = GlobalConfig(active_record=True, service_name="%sService")

    print("3. Building table models...\n")
    with SchemaModelBuilder(
        data_source_config=data_source,
        strategy_config=strategy,
        global_config=global_config,
    ) as builder:
        for table in builder.table_info_list:
            print(f"Table: {table.name} -> {table.entity_name}")
            print(f"  Mapper: {table.mapper_name}  Service: {table.service_name}")
            for field in table.fields:
                flags = []
                if field.key_flag:
                    flags.append("key")
                if field.keyword:
                    flags.append("keyword")
                if field.fill:
                    flags.append(f"fill={field.fill.value}")
                suffix = f" [{', '.join(flags)}]" if flags else ""
                print(f"    {field.column_name}: {field.property_type} {field.property_name}{suffix}")
            print(f"  Inherited: {[f.property_name for f in table.common_fields]}")
            print(f"  Imports: {sorted(table.required_imports)}\n")

        print("4. Diagnostics:")
        for diagnostic in builder.diagnostics:
            print(f"  {diagnostic.kind}: {diagnostic.message}")

        path = export_table_models(builder.table_info_list, "tables.yaml")
        print(f"\n5. Exported models to {path}")


if __name__ == "__main__":
    main()
