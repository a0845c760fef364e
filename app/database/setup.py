# ==============================================================================
# DATABASE SETUP - Idempotent Schema & Seed Initialization
# ==============================================================================
# Safe to run on every start: creates what is missing, never duplicates rows
# A failing step is logged and skipped; the service keeps starting
# ==============================================================================

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Awaitable, Callable, Dict, List, Tuple

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateColumn, CreateIndex, CreateTable

from app.core.constants import Roles
from app.core.exceptions import DatabaseError, EngineError, SeedInitError
from app.core.security import hash_password
from app.core.settings import DatabaseType, Settings
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.statements import StatementShape
from app.domain_models import SQLBase, new_id

logger = logging.getLogger(__name__)


# ==============================================================================
# SCHEMA EVOLUTION
# ==============================================================================

# Columns added after the first release; applied to existing databases
ADDITIVE_COLUMNS: List[Tuple[str, str]] = [
    ("users", "phone"),
    ("users", "is_active"),
    ("categories", "image_url"),
    ("products", "image_url"),
    ("products", "is_active"),
    ("orders", "payment_method"),
    ("orders", "payment_status"),
    ("vacancies", "is_active"),
]


# ==============================================================================
# SEED DATA
# ==============================================================================

SEED_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Diagnostic", "description": "Instruments for medical diagnosis"},
    {"name": "Surgical", "description": "General surgical instruments"},
    {"name": "Ophthalmic", "description": "Specialized eye surgery tools"},
    {"name": "Orthopedic", "description": "Bone and joint surgical tools"},
]

SEED_PRODUCTS: List[Dict[str, object]] = [
    {
        "name": "Premium Stethoscope",
        "description": "High-quality acoustic stethoscope for professionals.",
        "price": Decimal("120.0"),
        "stock": 50,
        "category": "Diagnostic",
        "image_url": "https://images.unsplash.com/photo-1584982324671-93959baa1264?w=400",
    },
    {
        "name": "Surgical Scalpel Set",
        "description": "Reusable stainless steel scalpel handles and blades.",
        "price": Decimal("45.5"),
        "stock": 200,
        "category": "Surgical",
        "image_url": "https://images.unsplash.com/photo-1579154341098-e4e158cc7f55?w=400",
    },
    {
        "name": "Digital Reflex Hammer",
        "description": "Electronic diagnostic hammer for reflex testing.",
        "price": Decimal("85.0"),
        "stock": 30,
        "category": "Diagnostic",
        "image_url": "https://images.unsplash.com/photo-1516549655169-df83a0774514?w=400",
    },
    {
        "name": "Hemostat Forceps",
        "description": "Precision locking forceps for surgical procedures.",
        "price": Decimal("25.99"),
        "stock": 150,
        "category": "Surgical",
        "image_url": "https://images.unsplash.com/photo-1551076805-e1869033e561?w=400",
    },
    {
        "name": "Ophthalmoscope",
        "description": "Direct ophthalmoscope for retinal examination.",
        "price": Decimal("240.0"),
        "stock": 20,
        "category": "Ophthalmic",
        "image_url": "https://images.unsplash.com/photo-1581595219315-a187dd40c322?w=400",
    },
    {
        "name": "Bone Saw",
        "description": "Oscillating bone saw for orthopedic surgery.",
        "price": Decimal("680.0"),
        "stock": 10,
        "category": "Orthopedic",
        "image_url": "https://images.unsplash.com/photo-1590012314607-cda9d9b699ae?w=400",
    },
]

SEED_CAREERS: List[Dict[str, str]] = [
    {
        "title": "Medical Sales Representative",
        "description": "Join our sales team to expand our footprint in the surgical market.",
    },
    {
        "title": "Software Engineer",
        "description": "Build digital solutions for medical procurement.",
    },
]

SEED_VACANCIES: List[Dict[str, str]] = [
    {
        "career": "Medical Sales Representative",
        "position": "Senior Sales Executive",
        "location": "New York, US",
        "salary_range": "$80k - $120k",
    },
    {
        "career": "Medical Sales Representative",
        "position": "Product Specialist",
        "location": "London, UK",
        "salary_range": "£45k - £65k",
    },
]


def dialect_for(database_type: DatabaseType) -> Dialect:
    """SQLAlchemy dialect used to render DDL for an engine."""
    if database_type == DatabaseType.POSTGRESQL:
        return postgresql.dialect()
    return sqlite.dialect()


def schema_statements(database_type: DatabaseType) -> List[str]:
    """
    Render CREATE TABLE / CREATE INDEX IF NOT EXISTS for every model.

    Tables come out in foreign-key dependency order.
    """
    dialect = dialect_for(database_type)
    statements: List[str] = []
    for table in SQLBase.metadata.sorted_tables:
        statements.append(
            str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)).strip()
        )
        for index in sorted(table.indexes, key=lambda ix: ix.name or ""):
            statements.append(
                str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)).strip()
            )
    return statements


def add_column_statement(database_type: DatabaseType, table: str, column: str) -> str:
    """Render an additive ALTER TABLE for one declared column."""
    dialect = dialect_for(database_type)
    definition = str(
        CreateColumn(SQLBase.metadata.tables[table].c[column]).compile(dialect=dialect)
    ).strip()
    if database_type == DatabaseType.POSTGRESQL:
        return f"ALTER TABLE {table} ADD COLUMN IF NOT EXISTS {definition}"
    return f"ALTER TABLE {table} ADD COLUMN {definition}"


class DatabaseInitializer:
    """
    Brings a database to the current schema and seeds reference rows.

    Every step is idempotent: tables and indexes are created only if
    absent, roles and the admin account only if missing, catalog data
    only into empty tables.

    Example:
        >>> initializer = DatabaseInitializer(adapter, settings)
        >>> await initializer.initialize()
        True
    """

    def __init__(self, adapter: BaseDatabaseAdapter, settings: Settings) -> None:
        self.adapter = adapter
        self.settings = settings

    # ==========================================================================
    # ORCHESTRATION
    # ==========================================================================

    def steps(self) -> List[Tuple[str, Callable[[], Awaitable[None]]]]:
        steps = [
            ("create_schema", self.create_schema),
            ("evolve_schema", self.evolve_schema),
            ("ensure_roles", self.ensure_roles),
            ("ensure_admin", self.ensure_admin),
        ]
        if self.settings.SEED_CATALOG:
            steps.append(("seed_catalog", self.seed_catalog))
            steps.append(("seed_careers", self.seed_careers))
        return steps

    async def initialize(self) -> bool:
        """
        Run every step, logging and skipping the ones that fail.

        Returns:
            True if all steps succeeded
        """
        succeeded = True
        for name, step in self.steps():
            try:
                await self._run_step(name, step)
            except SeedInitError as e:
                succeeded = False
                logger.error(f"Database setup step '{name}' failed: {e.message}")
        if succeeded:
            logger.info(f"Database ready ({self.adapter.database_type.value})")
        return succeeded

    async def _run_step(self, name: str, step: Callable[[], Awaitable[None]]) -> None:
        logger.debug(f"Database setup: {name}")
        try:
            await step()
        except DatabaseError as e:
            raise SeedInitError(message=e.message, step=name) from e
        except Exception as e:
            logger.debug(f"Database setup step '{name}' raised", exc_info=True)
            raise SeedInitError(message=f"{type(e).__name__}: {e}", step=name) from e

    # ==========================================================================
    # SCHEMA
    # ==========================================================================

    async def create_schema(self) -> None:
        for statement in schema_statements(self.adapter.database_type):
            await self.adapter.execute(statement)

    async def evolve_schema(self) -> None:
        for table, column in ADDITIVE_COLUMNS:
            statement = add_column_statement(self.adapter.database_type, table, column)
            try:
                await self.adapter.execute(statement)
            except EngineError as e:
                # SQLite has no ADD COLUMN IF NOT EXISTS
                if "duplicate column" not in e.message.lower():
                    raise
                logger.debug(f"Column {table}.{column} already present")

    # ==========================================================================
    # ACCOUNTS
    # ==========================================================================

    async def ensure_roles(self) -> None:
        for role_id, name in Roles.seeded():
            existing = await self.adapter.run(
                StatementShape.select("roles", ["id"], where={"name": name})
            )
            if existing.rows:
                continue
            await self.adapter.run(
                StatementShape.insert("roles", {"id": role_id, "name": name})
            )
            logger.info(f"Seeded role '{name}'")

    async def ensure_admin(self) -> None:
        email = self.settings.ADMIN_EMAIL
        existing = await self.adapter.run(
            StatementShape.select("users", ["id"], where={"email": email})
        )
        if existing.rows:
            return

        role = await self.adapter.run(
            StatementShape.select("roles", ["id"], where={"name": Roles.ADMIN})
        )
        role_id = role.scalar(default=Roles.ADMIN_ID)

        await self.adapter.run(
            StatementShape.insert(
                "users",
                {
                    "id": new_id(),
                    "full_name": self.settings.ADMIN_FULL_NAME,
                    "email": email,
                    "password_hash": hash_password(self.settings.ADMIN_PASSWORD),
                    "phone": self.settings.ADMIN_PHONE,
                    "role_id": role_id,
                },
            )
        )
        logger.info(f"Seeded admin account {email}")

    # ==========================================================================
    # REFERENCE DATA
    # ==========================================================================

    async def _is_empty(self, table: str) -> bool:
        result = await self.adapter.execute(f"SELECT COUNT(*) AS count FROM {table}")
        return int(result.scalar(default=0)) == 0

    async def _ids_by(self, table: str, column: str) -> Dict[str, str]:
        result = await self.adapter.run(StatementShape.select(table, ["id", column]))
        return {row[column]: row["id"] for row in result.rows}

    async def seed_catalog(self) -> None:
        if await self._is_empty("categories"):
            async with self.adapter.transaction() as tx:
                for category in SEED_CATEGORIES:
                    await tx.run(
                        StatementShape.insert("categories", {"id": new_id(), **category})
                    )
            logger.info(f"Seeded {len(SEED_CATEGORIES)} categories")

        if await self._is_empty("products"):
            categories = await self._ids_by("categories", "name")
            async with self.adapter.transaction() as tx:
                for product in SEED_PRODUCTS:
                    values = {k: v for k, v in product.items() if k != "category"}
                    values["category_id"] = categories.get(product["category"])
                    await tx.run(
                        StatementShape.insert("products", {"id": new_id(), **values})
                    )
            logger.info(f"Seeded {len(SEED_PRODUCTS)} products")

    async def seed_careers(self) -> None:
        if await self._is_empty("careers"):
            async with self.adapter.transaction() as tx:
                for career in SEED_CAREERS:
                    await tx.run(StatementShape.insert("careers", {"id": new_id(), **career}))
            logger.info(f"Seeded {len(SEED_CAREERS)} careers")

        if await self._is_empty("vacancies"):
            careers = await self._ids_by("careers", "title")
            async with self.adapter.transaction() as tx:
                for vacancy in SEED_VACANCIES:
                    values = {k: v for k, v in vacancy.items() if k != "career"}
                    values["career_id"] = careers.get(vacancy["career"])
                    await tx.run(
                        StatementShape.insert("vacancies", {"id": new_id(), **values})
                    )
            logger.info(f"Seeded {len(SEED_VACANCIES)} vacancies")


async def setup_database(adapter: BaseDatabaseAdapter, settings: Settings) -> bool:
    """
    Initialize the schema and seed data; never raises for step failures.

    Args:
        adapter: Connected database adapter
        settings: Application settings (admin account, seeding switch)

    Returns:
        True if every step succeeded
    """
    return await DatabaseInitializer(adapter, settings).initialize()
