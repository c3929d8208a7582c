import pytest

from schema_erd.model import SchemaModel, Table, Column, ForeignKey, Index, Relationship
from schema_erd.parsers.markdown import parse_schema_markdown

HEADER = (
    "| Column | Type | Nullable | Default | Primary | Foreign | Description |\n"
    "|--------|------|----------|---------|---------|---------|-------------|\n"
)

SCHEMA_DOC = (
    "# PostgreSQL Schema Report\n"
    "\n"
    "**Total Tables:** 3\n"
    "**Total Views:** 0\n"
    "**Total Functions:** 2\n"
    "**Total Indexes:** 4\n"
    "**Total Relationships:** 2\n"
    "\n"
    "## Tables\n"
    "\n"
    "### Table: `users`\n"
    "\n"
    "**Columns:**\n"
    "\n"
    + HEADER +
    "| `id` | `integer` | NO | nextval('users_id_seq') | 🔑 |  | Primary key |\n"
    "| `username` | `varchar(50)` | NO |  |  |  | Login name |\n"
    "| `email` | `varchar(100)` | YES |  |  |  | Contact address |\n"
    "\n"
    "**Primary Key:** `id`\n"
    "\n"
    "### Table: `orders`\n"
    "\n"
    "**Columns:**\n"
    "\n"
    + HEADER +
    "| `id` | `integer` | NO |  | 🔑 |  |  |\n"
    "| `user_id` | `integer` | NO |  |  | 🔗 | Owner |\n"
    "| `status` | `text` | YES | 'new' |  |  |  |\n"
    "\n"
    "**Primary Key:** `id`\n"
    "\n"
    "**Foreign Keys:**\n"
    "- `user_id` → `users.id`\n"
    "\n"
    "**DDL:**\n"
    "```sql\n"
    "CREATE TABLE orders (id integer PRIMARY KEY);\n"
    "```\n"
    "\n"
    "#### Table: `audit_log`\n"
    "\n"
    "**Columns:**\n"
    "\n"
    + HEADER +
    "| `event` | `text` | YES |  |  |  |  |\n"
    "| `order_id` | `integer` | YES |  |  | 🔗 |  |\n"
    "\n"
    "**Foreign Keys:**\n"
    "- `order_id` → `orders.id`\n"
)


@pytest.fixture
def schema_doc() -> str:
    return SCHEMA_DOC


@pytest.fixture
def parsed(schema_doc) -> SchemaModel:
    return parse_schema_markdown(schema_doc)


@pytest.fixture
def users_only() -> SchemaModel:
    return SchemaModel(tables=(
        Table(
            name="users",
            columns=(
                Column("id", "integer", nullable=False, pk=True),
                Column("username", "varchar(50)", nullable=False),
                Column("email", "varchar(100)", nullable=False),
            ),
            primary_key="id",
        ),
    ))


@pytest.fixture
def full_schema(parsed) -> SchemaModel:
    return parsed.with_relationships([
        Relationship("orders", "user_id", "users", "id", "fk_orders_user", "CASCADE", "NO ACTION"),
        Relationship("audit_log", "order_id", "orders", "id", "fk_audit_order", "SET NULL", "CASCADE"),
    ]).with_indexes([
        Index("users_pkey", "users", ("id",), unique=True, primary=True),
        Index("idx_orders_user_status", "orders", ("user_id", "status")),
    ])


@pytest.fixture
def schema_file(tmp_path, schema_doc):
    p = tmp_path / "postgres-schema-2026-10-19.md"
    p.write_text(schema_doc, encoding="utf-8")
    return p
